#!/usr/bin/env python3
# -*- coding: utf-8 -*-
# filename: remote.py

from io import BytesIO
import requests
from PIL import Image
from .registry import CaptchaRecognizer, register_recognizer
from ..exceptions import ServiceHttpError, TransportError, InvalidResponseError

_DEFAULT_MIME = "application/octet-stream"


def sniff_content_type(raw):
    try:
        im = Image.open(BytesIO(raw))
    except (OSError, ValueError):
        return _DEFAULT_MIME
    return Image.MIME.get(im.format, _DEFAULT_MIME)


def _parse_candidates(resp):
    try:
        data = resp.json()
    except ValueError:
        raise InvalidResponseError(msg="Captcha service returned invalid JSON")
    if not isinstance(data, dict):
        raise InvalidResponseError(msg="Captcha service returned %s, expect object" % type(data).__name__)
    candidates = data.get("response")
    if not isinstance(candidates, list) or not all(isinstance(c, str) for c in candidates):
        raise InvalidResponseError(msg="Captcha service response has no string list 'response'")
    return candidates


@register_recognizer
class RemoteRecognizer(CaptchaRecognizer):
    """
    Talks to a recognition service exposing ``POST /solve``. The raw image is
    posted as the request body and the service answers with
    ``{"response": [guess, ...]}``.
    """

    name = "remote"

    def __init__(self, config=None):
        super().__init__(config)
        if config is not None:
            self._endpoint_root = config.captcha_uri
            self._timeout = config.captcha_timeout
        else:
            self._endpoint_root = "http://localhost:8080"
            self._timeout = 30.0
        self._session = requests.Session()

    @property
    def url(self):
        return self._endpoint_root + "/solve"

    def recognize(self, raw):
        headers = {"Content-Type": sniff_content_type(raw)}
        try:
            resp = self._session.post(self.url, data=raw, headers=headers, timeout=self._timeout)
        except requests.Timeout:
            raise TransportError(msg="Captcha service connection time out")
        except requests.ConnectionError:
            raise TransportError(msg="Unable to connect to the captcha service")
        except requests.RequestException as e:
            raise TransportError(msg="Captcha service request failed: %s" % e)
        if resp.status_code != 200:
            raise ServiceHttpError(resp.status_code)
        return _parse_candidates(resp)
