#!/usr/bin/env python3
# -*- coding: utf-8 -*-
# filename: portal.py

import time
from requests.exceptions import RequestException
from .client import BaseClient
from .const import USER_AGENT, PortalURL
from .hook import get_hooks, check_status_code, debug_print_request
from .logger import ConsoleLogger, FileLogger
from .parser import check_response, is_login_success, get_login_token, get_std_name, get_seat_count
from .rate_limit import TokenBucket
from .captcha import CaptchaSolver
from .exceptions import (
    CAPTCHA_RETRYABLE_ERRORS,
    StatusCodeError,
    LoginExhaustedError,
    QueryExhaustedError,
)

cout = ConsoleLogger("portal")
ferr = FileLogger("portal.error")


class PortalClient(BaseClient):
    """
    One browsing session against the enrollment portal.

    The portal is a server-side state machine: after login the session has to
    walk IndexCtrl -> LoginCtrl -> EnrollCtrl -> CourseQueryCtrl before any
    course query is accepted. There is no explicit state kept here; a step
    that is out of order makes the portal answer with the corruption marker,
    which surfaces as ``SessionCorruptedError``.
    """

    default_headers = {
        "User-Agent": USER_AGENT,
    }
    default_client_timeout = 30

    def __init__(self, endpoint_root, account, password, solver,
                 max_retries=10, captcha_retry=20, retry_delay=5.0, **kwargs):
        super().__init__(**kwargs)
        self._endpoint_root = endpoint_root.rstrip("/")
        self._account = account
        self._password = password
        self._solver = solver
        self._max_retries = max_retries
        self._captcha_retry = captcha_retry
        self._retry_delay = retry_delay

    @classmethod
    def from_config(cls, config, solver=None):
        if solver is None:
            solver = CaptchaSolver(config=config)
        hooks = [check_status_code]
        if config.is_debug_print_request:
            hooks.append(debug_print_request)
        return cls(
            config.portal_endpoint_root,
            config.account,
            config.password,
            solver,
            max_retries=config.max_retries,
            captcha_retry=config.captcha_retry,
            retry_delay=config.retry_delay,
            timeout=config.portal_timeout,
            hooks=get_hooks(*hooks),
            bucket=TokenBucket(config.rate_limit_rps, config.rate_limit_burst),
        )

    def _url(self, path):
        return self._endpoint_root + path

    def _referer(self):
        return {"Referer": self._endpoint_root}

    def clear(self):
        self.clear_cookies()

    ## Endpoints

    def get_LoginCheck(self, **kwargs):
        return self._get(self._url(PortalURL.LoginCheck), **kwargs)

    def get_RandImage(self, **kwargs):
        return self._get(self._url(PortalURL.RandImage), **kwargs)

    def post_LoginCheck(self, token, validate_code, **kwargs):
        return self._post(
            self._url(PortalURL.LoginCheck),
            params={
                "action": "login",
                "id": token,
            },
            data={
                "userid": self._account,
                "password": self._password,
                "checkTW": "1",
                "validateCode": validate_code,
            },
            headers=self._referer(),
            **kwargs,
        )

    def get_Index(self, **kwargs):
        return self._get(self._url(PortalURL.Index), params={"language": "TW"}, **kwargs)

    def post_LoginCtrl(self, std_name, **kwargs):
        return self._post(
            self._url(PortalURL.Login),
            data={
                "userid": self._account,
                "stdName": std_name,
                "checkTW": "1",
            },
            headers=self._referer(),
            **kwargs,
        )

    def get_Enroll(self, **kwargs):
        return self._get(self._url(PortalURL.Enroll), params={"action": "go"}, **kwargs)

    def get_CourseQueryEntry(self, **kwargs):
        return self._get(self._url(PortalURL.CourseQuery), params={"action": "query"}, **kwargs)

    def post_CourseQuery(self, course_id, **kwargs):
        return self._post(
            self._url(PortalURL.CourseQuery),
            data={
                "serialNo": course_id,
                "notFull": "1",
                "action": "showGrid",
                "actionButton": "query",
            },
            headers=self._referer(),
            **kwargs,
        )

    ## Steps

    def fetch_login_token(self):
        r = self.get_LoginCheck()
        check_response(r.text)
        return get_login_token(r.text)

    def fetch_captcha(self):
        raw = self.get_RandImage().content
        try:
            text = raw.decode("utf-8")
        except UnicodeDecodeError:
            pass
        else:
            check_response(text)
        return raw

    def login(self):
        for attempt in range(1, self._captcha_retry + 1):
            token = self.fetch_login_token()
            raw = self.fetch_captcha()
            try:
                code = self._solver.solve(raw)
            except CAPTCHA_RETRYABLE_ERRORS as e:
                cout.warning("Captcha unresolved (%d/%d): %s" % (attempt, self._captcha_retry, e))
                self.clear()
                continue

            r = self.post_LoginCheck(token, code)
            if is_login_success(r.text):
                cout.info("Login success (attempt %d)" % attempt)
                return
            cout.warning("Login rejected (%d/%d), captcha: %s" % (attempt, self._captcha_retry, code))
            self.clear()

        raise LoginExhaustedError(msg="Login max retry reached (%d)" % self._captcha_retry)

    def landing_page(self):
        r = self.get_Index()
        check_response(r.text)
        name = get_std_name(r.text)

        r = self.post_LoginCtrl(name)
        check_response(r.text)

        # load main page
        r = self.get_Enroll()
        check_response(r.text)

        # load course select page
        r = self.get_CourseQueryEntry()
        check_response(r.text)

    def query(self, course_id):
        retries = 0
        while True:
            try:
                r = self.post_CourseQuery(course_id)
            except (RequestException, StatusCodeError) as e:
                if retries >= self._max_retries:
                    ferr.error(e)
                    raise QueryExhaustedError(
                        msg="Query %s max retry reached (%d): %s" % (course_id, self._max_retries, e)
                    ) from e
                retries += 1
                cout.warning("Query %s failed (%d/%d): %s" % (course_id, retries, self._max_retries, e))
                time.sleep(self._retry_delay)
                continue

            text = r.text
            check_response(text)
            if not text:
                # the grid is not rendered yet; this wait is not bounded by max_retries
                cout.debug("Query %s got an empty response, wait %s s" % (course_id, self._retry_delay))
                time.sleep(self._retry_delay)
                continue
            return get_seat_count(text)
