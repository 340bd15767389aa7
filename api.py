import logging
from urllib.parse import quote

from requests import get, post, put

logger = logging.getLogger(__name__)


class MissingTokenError(Exception):
    def __init__(self):
        super().__init__("LIFX API token not configured")


class CloudAPIError(Exception):
    def __init__(self, status_code, body=""):
        super().__init__(f"LIFX API returned {status_code}")
        self.status_code = status_code
        self.body = body


class LifxAPIClient:
    """Thin wrapper over the LIFX HTTP API. One outbound call per method, no retries."""

    def __init__(self, settings):
        self.url = settings.api_url
        self.token = settings.api_token
        self.timeout = settings.request_timeout

    @property
    def headers(self):
        return {
            "Authorization": "Bearer " + self.token,
            "Content-Type": "application/json",
        }

    def _request(self, method, path, payload=None):
        if not self.token:
            logger.error("Refusing %s %s: LIFX API token not configured", method, path)
            raise MissingTokenError()

        url = self.url + path
        logger.info("LIFX %s %s", method, path)

        kwargs = {"headers": self.headers, "timeout": self.timeout}
        if payload is not None:
            kwargs["json"] = payload

        send = {"GET": get, "POST": post, "PUT": put}[method]
        response = send(url, **kwargs)
        if not response.ok:
            logger.error("LIFX API error: %s - %s", response.status_code, response.text)
            raise CloudAPIError(response.status_code, response.text)
        return response.json()

    @staticmethod
    def _selector(selector):
        # Selectors like "group:Living Room" must survive as a single path segment
        return quote(selector, safe=":|,-_.")

    def list_lights(self, selector):
        return self._request("GET", f"/lights/{self._selector(selector)}")

    def set_state(self, selector, payload):
        return self._request("PUT", f"/lights/{self._selector(selector)}/state", payload)

    def run_effect(self, selector, effect, payload):
        return self._request("POST", f"/lights/{self._selector(selector)}/effects/{effect}", payload)

    def list_scenes(self):
        return self._request("GET", "/scenes")

    def activate_scene(self, scene_id, payload):
        return self._request("PUT", f"/scenes/scene_id:{quote(scene_id, safe='')}/activate", payload)
