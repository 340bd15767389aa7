import logging

from flask import Blueprint, Flask, current_app, jsonify, redirect, render_template, request
from werkzeug.exceptions import HTTPException

from api import CloudAPIError, LifxAPIClient, MissingTokenError
from auth import (
    EMAIL_COOKIE,
    clear_session_cookies,
    gate_redirect,
    set_session_cookies,
    validate_credentials,
)
from commands import EFFECTS, InvalidRequest, SceneActivation, StateUpdate
from config import Settings

logger = logging.getLogger(__name__)

pages = Blueprint("pages", __name__)
api_routes = Blueprint("api", __name__, url_prefix="/api")


def _settings():
    return current_app.config["SETTINGS"]


def _lifx():
    client = current_app.extensions["lifx"]
    if not client.token:
        logger.error("Refusing %s %s: LIFX API token not configured", request.method, request.path)
        raise MissingTokenError()
    return client


def _json_body(tolerant=False):
    """Parse the request body as a JSON object. An empty body counts as {}."""
    if not request.get_data():
        return {}
    body = request.get_json(silent=True, force=True)
    if isinstance(body, dict):
        return body
    if tolerant:
        return {}
    raise InvalidRequest("Request body must be a JSON object")


def _relay(failure, call, *args):
    try:
        return jsonify(call(*args))
    except CloudAPIError as e:
        return jsonify({"error": failure}), e.status_code


# Pages

@pages.route('/')
def index():
    return render_template('index.html', user_email=request.cookies.get(EMAIL_COOKIE, ""))


@pages.route('/login')
def login_page():
    return render_template('login.html')


# Auth

@api_routes.route('/auth/login', methods=['POST'])
def login():
    body = _json_body()
    email = body.get('email')
    password = body.get('password')

    if not email or not password:
        return jsonify({"error": "Email and password are required"}), 400

    if not validate_credentials(_settings(), email, password):
        logger.warning("Rejected login for %s", email)
        return jsonify({"error": "Invalid credentials"}), 401

    logger.info("Login succeeded for %s", email)
    response = jsonify({"success": True})
    return set_session_cookies(response, email, secure=_settings().secure_cookies)


@api_routes.route('/auth/logout', methods=['POST'])
def logout():
    logger.info("Logout")
    response = jsonify({"success": True})
    return clear_session_cookies(response, secure=_settings().secure_cookies)


# Devices

@api_routes.route('/devices', methods=['GET'])
def list_devices():
    lifx = _lifx()
    selector = request.args.get('selector') or _settings().default_selector
    return _relay("Failed to fetch lights from LIFX", lifx.list_lights, selector)


@api_routes.route('/devices/<selector>/state', methods=['POST'])
def set_device_state(selector):
    lifx = _lifx()
    update = StateUpdate.from_body(_json_body())
    return _relay("Failed to update light", lifx.set_state, selector, update.to_payload())


@api_routes.route('/state', methods=['POST'])
def set_state():
    lifx = _lifx()
    body = _json_body()
    selector = body.get('selector') or _settings().default_selector
    if not isinstance(selector, str):
        raise InvalidRequest("'selector' must be a string")

    update = StateUpdate.from_body(body)
    return _relay("Failed to update light state", lifx.set_state, selector, update.to_payload())


@api_routes.route('/devices/<selector>/effects/<name>', methods=['POST'])
def run_effect(selector, name):
    lifx = _lifx()
    effect_type = EFFECTS.get(name)
    if effect_type is None:
        return jsonify({"error": f"Unknown effect: {name}"}), 404

    # Stopping effects must work even when the client sends no usable body
    effect = effect_type.from_body(_json_body(tolerant=effect_type.name == "off"))
    return _relay(f"Failed to apply {name} effect", lifx.run_effect, selector, name, effect.to_payload())


# Scenes

@api_routes.route('/scenes', methods=['GET'])
def list_scenes():
    lifx = _lifx()
    return _relay("Failed to fetch scenes from LIFX", lifx.list_scenes)


@api_routes.route('/scenes/<scene_id>/activate', methods=['PUT'])
def activate_scene(scene_id):
    lifx = _lifx()
    activation = SceneActivation.from_body(_json_body())
    return _relay("Failed to activate scene", lifx.activate_scene, scene_id, activation.to_payload())


@api_routes.errorhandler(InvalidRequest)
def handle_invalid_request(e):
    return jsonify({"error": str(e)}), 400


@api_routes.errorhandler(MissingTokenError)
def handle_missing_token(e):
    return jsonify({"error": str(e)}), 500


@api_routes.errorhandler(HTTPException)
def handle_http_error(e):
    return jsonify({"error": e.description}), e.code


@api_routes.errorhandler(Exception)
def handle_unexpected_error(e):
    logger.exception("Unhandled error in %s %s", request.method, request.path)
    return jsonify({"error": "An unexpected error occurred"}), 500


def session_gate():
    target = gate_redirect(request.path, request.cookies)
    if target is not None:
        return redirect(target)


def create_app(settings=None):
    settings = settings or Settings.from_env()

    app = Flask(__name__)
    app.config["SETTINGS"] = settings
    app.extensions["lifx"] = LifxAPIClient(settings)

    app.before_request(session_gate)
    app.register_blueprint(pages)
    app.register_blueprint(api_routes)

    if not settings.api_token:
        logger.warning("LIFX_API_TOKEN is not set, device and scene requests will fail")
    if not settings.shared_password or not settings.allowed_emails:
        logger.warning("Login is not configured, every sign-in attempt will be rejected")
    return app
