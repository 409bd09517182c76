#!/usr/bin/env python3
# -*- coding: utf-8 -*-

import os
import tempfile
import unittest
from unittest import mock

from coursewatch.config import CourseWatchConfig
from coursewatch.preflight import run_preflight

_CLEAN_ENV = {
    "COURSEWATCH_ACCOUNT": "",
    "COURSEWATCH_PASSWORD": "",
    "COURSEWATCH_BARK_TOKEN": "",
}


def _run_preflight_with_ini(text: str):
    tmp = tempfile.NamedTemporaryFile("w", delete=False, encoding="utf-8", suffix=".ini")
    try:
        tmp.write(text)
        tmp.flush()
        tmp.close()
        with mock.patch.dict(os.environ, _CLEAN_ENV):
            return run_preflight(CourseWatchConfig(tmp.name))
    finally:
        if os.path.exists(tmp.name):
            os.unlink(tmp.name)


_GOOD = """
[user]
account=40947030S
password=pwd

[subscriber:40947030S]
bark_key=KEY
"""


class PreflightConfigOfflineTest(unittest.TestCase):
    def test_good_config(self):
        self.assertEqual(_run_preflight_with_ini(_GOOD), [])

    def test_missing_credentials_error(self):
        issues = _run_preflight_with_ini("[user]\naccount=\n")
        errs = [i for i in issues if i.level == "ERROR"]
        self.assertTrue(any(i.code == "credential_missing" and i.key_path == "user.account" for i in errs))
        self.assertTrue(any(i.code == "credential_missing" and i.key_path == "user.password" for i in errs))

    def test_retry_budget_error(self):
        issues = _run_preflight_with_ini(_GOOD + "[portal]\nmax_retries=0\ncaptcha_retry=x\n")
        errs = [i for i in issues if i.level == "ERROR"]
        self.assertTrue(any(i.code == "retry_budget_invalid" and i.key_path == "portal.max_retries" for i in errs))
        self.assertTrue(any(i.code == "invalid_value" and i.key_path == "portal.captcha_retry" for i in errs))

    def test_unknown_provider_error(self):
        issues = _run_preflight_with_ini(_GOOD + "[captcha]\nprovider=baidu\n")
        self.assertTrue(any(i.level == "ERROR" and i.code == "captcha_provider_unknown" for i in issues))

    def test_poll_interval_low_warn(self):
        issues = _run_preflight_with_ini(_GOOD + "[scheduler]\ninterval=5\n")
        errs = [i for i in issues if i.level == "ERROR"]
        warns = [i for i in issues if i.level == "WARN"]
        self.assertEqual(errs, [])
        self.assertTrue(any(i.code == "poll_interval_low" for i in warns))

    def test_no_subscribers_warn(self):
        issues = _run_preflight_with_ini("[user]\naccount=a\npassword=b\n")
        self.assertTrue(any(i.level == "WARN" and i.code == "no_subscribers" for i in issues))
        issues = _run_preflight_with_ini("[user]\naccount=a\npassword=b\n[notification]\ndisable_push=true\n")
        self.assertEqual(issues, [])


if __name__ == "__main__":
    unittest.main()
