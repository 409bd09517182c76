#!/usr/bin/env python3
# -*- coding: utf-8 -*-
# filename: client.py

import requests
from .hook import merge_hooks
from .rate_limit import TokenBucket


class BaseClient(object):

    default_headers = {}
    default_client_timeout = 10

    def __init__(self, *args, **kwargs):
        if self.__class__ is __class__:
            raise NotImplementedError
        self._timeout = kwargs.get("timeout", self.__class__.default_client_timeout)
        self._hooks = kwargs.get("hooks")
        self._bucket = kwargs.get("bucket") or TokenBucket(0)
        self._session = requests.sessions.Session()
        self._session.headers.update(self.__class__.default_headers)

    @property
    def cookies(self):
        return self._session.cookies

    def _request(self, method, url, params=None, data=None, headers=None, hooks=None, timeout=None, **kwargs):
        if timeout is None:
            timeout = self._timeout
        self._bucket.consume(1.0)
        return self._session.request(
            method,
            url,
            params=params,
            data=data,
            headers=headers,
            hooks=merge_hooks(self._hooks, hooks),
            timeout=timeout,
            **kwargs,
        )

    def _get(self, url, params=None, **kwargs):
        return self._request('GET', url, params=params, **kwargs)

    def _post(self, url, data=None, **kwargs):
        return self._request('POST', url, data=data, **kwargs)

    def clear_cookies(self):
        self._session.cookies.clear()
