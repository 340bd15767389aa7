import hmac
import logging

logger = logging.getLogger(__name__)

AUTH_COOKIE = "auth"
EMAIL_COOKIE = "user_email"
AUTH_MARKER = "true"
SESSION_MAX_AGE = 60 * 60 * 24 * 7  # 7 days

LOGIN_PATH = "/login"
UNGUARDED_ROOTS = ("/api", "/static")


def validate_credentials(settings, email, password):
    """Check an email/password pair against the configured allow-list and shared password.

    An empty shared password is treated as a misconfiguration and rejects every
    attempt, including an empty submitted password.
    """
    if not settings.shared_password:
        logger.warning("AUTH_SHARED_PASSWORD is not configured, rejecting login")
        return False
    if not isinstance(email, str) or not isinstance(password, str):
        return False

    if email.strip().lower() not in settings.allowed_emails:
        return False
    return hmac.compare_digest(password.encode("utf-8"), settings.shared_password.encode("utf-8"))


def is_authenticated(cookies):
    return cookies.get(AUTH_COOKIE) == AUTH_MARKER


def set_session_cookies(response, email, secure=False):
    response.set_cookie(AUTH_COOKIE, AUTH_MARKER, max_age=SESSION_MAX_AGE,
                        httponly=True, secure=secure, samesite="Lax", path="/")
    # Display only, never read for authorization
    response.set_cookie(EMAIL_COOKIE, email, max_age=SESSION_MAX_AGE,
                        httponly=False, secure=secure, samesite="Lax", path="/")
    return response


def clear_session_cookies(response, secure=False):
    response.set_cookie(AUTH_COOKIE, "", max_age=0, expires=0,
                        httponly=True, secure=secure, samesite="Lax", path="/")
    response.set_cookie(EMAIL_COOKIE, "", max_age=0, expires=0,
                        httponly=False, secure=secure, samesite="Lax", path="/")
    return response


def gate_redirect(path, cookies):
    """Decide where a page request should go.

    Returns the path to redirect to, or None to let the request through.
    API and static paths are never redirected.
    """
    if any(path == root or path.startswith(root + "/") for root in UNGUARDED_ROOTS):
        return None

    authenticated = is_authenticated(cookies)
    if authenticated and path == LOGIN_PATH:
        return "/"
    if not authenticated and path != LOGIN_PATH:
        return LOGIN_PATH
    return None
