#!/usr/bin/env python3
# -*- coding: utf-8 -*-

import os
import tempfile
import unittest
from unittest import mock

from coursewatch.config import CourseWatchConfig
from coursewatch.exceptions import UserInputException


def _write_ini(text):
    tmp = tempfile.NamedTemporaryFile("w", delete=False, encoding="utf-8", suffix=".ini")
    tmp.write(text)
    tmp.flush()
    tmp.close()
    return tmp.name


class ConfigOfflineTest(unittest.TestCase):
    def _config(self, text):
        path = _write_ini(text)
        self.addCleanup(os.unlink, path)
        return CourseWatchConfig(path)

    def test_env_override_config_ini(self):
        path = _write_ini("[user]\naccount=TEST_USER\npassword=TEST_PWD\n")
        self.addCleanup(os.unlink, path)
        with mock.patch.dict(os.environ, {"COURSEWATCH_CONFIG_INI": path}):
            c = CourseWatchConfig()
        self.assertEqual(c.account, "TEST_USER")
        self.assertEqual(c.password, "TEST_PWD")

    def test_missing_file(self):
        with self.assertRaises(FileNotFoundError):
            CourseWatchConfig("/nonexistent/coursewatch.ini")

    def test_defaults(self):
        c = self._config("[user]\naccount=a\npassword=b\n")
        self.assertEqual(c.portal_endpoint_root, "https://cos4s.ntnu.edu.tw")
        self.assertEqual(c.max_retries, 10)
        self.assertEqual(c.captcha_retry, 20)
        self.assertEqual(c.retry_delay, 5.0)
        self.assertEqual(c.captcha_provider, "remote")
        self.assertEqual(c.captcha_uri, "http://localhost:8080")
        self.assertEqual(c.poll_interval, 300.0)
        self.assertEqual(c.store_path, "./db/watchlist.json")
        self.assertFalse(c.disable_push)
        self.assertFalse(c.is_debug_print_request)
        self.assertEqual(c.rate_limit_rps, 0.0)

    def test_portal_values(self):
        c = self._config(
            "[portal]\nsubsite=2\nmax_retries=3\ncaptcha_retry=5\n"
            "[captcha]\nprovider=Dummy\nuri=http://solver:9000/\n"
        )
        self.assertEqual(c.portal_endpoint_root, "https://cos2s.ntnu.edu.tw")
        self.assertEqual(c.max_retries, 3)
        self.assertEqual(c.captcha_retry, 5)
        self.assertEqual(c.captcha_provider, "dummy")
        self.assertEqual(c.captcha_uri, "http://solver:9000")

    def test_endpoint_root_override(self):
        c = self._config("[portal]\nendpoint_root=http://127.0.0.1:8000/\n")
        self.assertEqual(c.portal_endpoint_root, "http://127.0.0.1:8000")

    def test_secret_env_fallback(self):
        c = self._config("[user]\naccount=\npassword=\n")
        env = {
            "COURSEWATCH_ACCOUNT": "ENV_USER",
            "COURSEWATCH_PASSWORD": "ENV_PWD",
            "COURSEWATCH_CAPTCHA_URI": "http://env-solver",
        }
        with mock.patch.dict(os.environ, env):
            self.assertEqual(c.account, "ENV_USER")
            self.assertEqual(c.password, "ENV_PWD")
            self.assertEqual(c.captcha_uri, "http://env-solver")

    def test_invalid_number(self):
        c = self._config("[portal]\nmax_retries=ten\n[notification]\ndisable_push=maybe\n")
        with self.assertRaises(UserInputException):
            c.max_retries
        with self.assertRaises(UserInputException):
            c.disable_push

    def test_subscribers(self):
        c = self._config(
            "[subscriber:40947030S]\nbark_key=KEY1\n"
            "[subscriber: 41047001S ]\nbark_key=KEY2\n"
        )
        self.assertEqual(dict(c.subscribers), {"40947030S": "KEY1", "41047001S": "KEY2"})

    def test_subscriber_without_key(self):
        c = self._config("[subscriber:40947030S]\n")
        with self.assertRaises(UserInputException):
            c.subscribers


if __name__ == "__main__":
    unittest.main()
