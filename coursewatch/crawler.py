#!/usr/bin/env python3
# -*- coding: utf-8 -*-
# filename: crawler.py

import threading
from .logger import ConsoleLogger
from .portal import PortalClient
from .exceptions import SessionCorruptedError

cout = ConsoleLogger("crawler")


class CrawlerManager(object):
    """
    Owns the single portal session and the policy for recovering it.

    This is the only place where a corrupted session turns into a retry:
    the session is rebuilt from scratch (clear, login, landing page) and the
    query is issued again, at most ``max_retries`` times. Every other error
    goes straight to the caller.
    """

    def __init__(self, client, max_retries=10):
        self._client = client
        self._max_retries = max_retries
        self._lock = threading.RLock()

    @classmethod
    def from_config(cls, config, solver=None):
        return cls(PortalClient.from_config(config, solver=solver), max_retries=config.max_retries)

    def init(self):
        with self._lock:
            cout.debug("start init")
            self._client.clear()
            cout.debug("start login")
            self._client.login()
            cout.debug("start landing page")
            self._client.landing_page()
            cout.debug("end init")

    def query(self, course_id):
        with self._lock:
            retries = 0
            while True:
                try:
                    count = self._client.query(course_id)
                except SessionCorruptedError:
                    cout.warning("Session corrupted while querying %s (%d/%d), re-init"
                                 % (course_id, retries, self._max_retries))
                    self.init()
                    if retries > self._max_retries:
                        raise
                    retries += 1
                    continue
                return count != 0
