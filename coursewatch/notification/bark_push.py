#!/usr/bin/env python3
# -*- coding: utf-8 -*-
# filename: notification/bark_push.py

from urllib.parse import quote
import requests
from ..logger import ConsoleLogger, FileLogger

cout = ConsoleLogger("notify")
ferr = FileLogger("notify.error")


class Notify(object):
    """
    Bark push, one device key per subscriber. ``send_direct_message`` never
    raises; the return value tells whether the push was accepted.
    """

    def __init__(self, _disable_push=False, _server="https://api.day.app", _keys=None, _timeout=10):
        self.disable_push = _disable_push
        self.server = _server.rstrip("/")
        self.keys = dict(_keys or {})
        self.timeout = _timeout
        self._session = requests.Session()

    @classmethod
    def from_config(cls, config):
        return cls(
            _disable_push=config.disable_push,
            _server=config.bark_server,
            _keys=config.subscribers,
            _timeout=config.notification_timeout,
        )

    def _url(self, key, title, body):
        return "%s/%s/%s/%s" % (self.server, key, quote(title, safe=""), quote(body, safe=""))

    def send_bark_push(self, key, title, body):
        try:
            r = self._session.get(self._url(key, title, body), timeout=self.timeout)
        except requests.RequestException as e:
            ferr.error("Bark push failed: %s" % e)
            return False
        if r.status_code != 200:
            ferr.error("Bark push failed: %s %s" % (r.status_code, r.text[:200]))
            return False
        return True

    def send_direct_message(self, user_id, text, title="coursewatch"):
        if self.disable_push:
            cout.info("Push disabled, message to %s: %s" % (user_id, text))
            return True
        key = self.keys.get(user_id)
        if key is None:
            cout.warning("No bark key configured for user %s, message dropped" % user_id)
            return False
        return self.send_bark_push(key, title, text)
