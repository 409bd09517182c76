#!/usr/bin/env python3
# -*- coding: utf-8 -*-
# filename: config.py

import os
import re
from configparser import RawConfigParser, DuplicateSectionError
from collections import OrderedDict
from .const import DEFAULT_CONFIG_INI, CONFIG_INI_ENV, PortalURL
from .exceptions import UserInputException

_reNamespacedSection = re.compile(r'^\s*(?P<ns>[^:]+?)\s*:\s*(?P<id>[^,]+?)\s*$')


class BaseConfig(object):

    def __init__(self, config_file=None):
        if self.__class__ is __class__:
            raise NotImplementedError
        file = os.path.normpath(os.path.abspath(config_file))
        if not os.path.exists(file):
            raise FileNotFoundError("Config file was not found: %s" % file)
        self._config = RawConfigParser()
        self._config.read(file, encoding="utf-8-sig")

    def get_optional(self, section, key, default=None):
        if self._config.has_option(section, key):
            return self._config.get(section, key)
        return default

    def get_optional_bool(self, section, key, default=False):
        if not self._config.has_option(section, key):
            return default
        try:
            return self._config.getboolean(section, key)
        except ValueError:
            raise UserInputException("Invalid boolean for %s.%s" % (section, key))

    def get_optional_int(self, section, key, default, minimum=None):
        v = self.get_optional(section, key)
        if v is None or v.strip() == "":
            return default
        try:
            v = int(v)
        except ValueError:
            raise UserInputException("Invalid %s.%s: %r" % (section, key, v))
        if minimum is not None:
            v = max(minimum, v)
        return v

    def get_optional_float(self, section, key, default, minimum=None):
        v = self.get_optional(section, key)
        if v is None or v.strip() == "":
            return default
        try:
            v = float(v)
        except ValueError:
            raise UserInputException("Invalid %s.%s: %r" % (section, key, v))
        if minimum is not None:
            v = max(minimum, v)
        return v

    def ns_sections(self, ns):
        ns = ns.strip()
        ns_sects = OrderedDict()  # { id: str(section) }
        for s in self._config.sections():
            mat = _reNamespacedSection.match(s)
            if mat is None:
                continue
            if mat.group('ns') != ns:
                continue
            id_ = mat.group('id')
            if id_ in ns_sects:
                raise DuplicateSectionError("%s:%s" % (ns, id_))
            ns_sects[id_] = s
        return [(id_, s) for id_, s in ns_sects.items()]  # [ (id, str(section)) ]


def _resolve_config_ini(config_file=None):
    return config_file or os.getenv(CONFIG_INI_ENV) or DEFAULT_CONFIG_INI


class CourseWatchConfig(BaseConfig):
    """
    Process configuration. Built once at startup and handed to the
    portal client, crawler manager and scheduler.
    """

    ALLOWED_PROVIDERS = ("remote", "dummy")

    def __init__(self, config_file=None):
        super().__init__(_resolve_config_ini(config_file))

    def _secret(self, section, key, env):
        v = self.get_optional(section, key)
        if v is None or v.strip() == "":
            v = os.getenv(env)
        return v

    # [user]

    @property
    def account(self):
        return self._secret("user", "account", "COURSEWATCH_ACCOUNT")

    @property
    def password(self):
        return self._secret("user", "password", "COURSEWATCH_PASSWORD")

    # [portal]

    @property
    def portal_subsite(self):
        return self.get_optional_int("portal", "subsite", 4, minimum=1)

    @property
    def portal_endpoint_root(self):
        v = self.get_optional("portal", "endpoint_root")
        if v is None or v.strip() == "":
            return PortalURL.root_for(self.portal_subsite)
        return v.strip().rstrip("/")

    @property
    def max_retries(self):
        return self.get_optional_int("portal", "max_retries", 10)

    @property
    def captcha_retry(self):
        return self.get_optional_int("portal", "captcha_retry", 20)

    @property
    def retry_delay(self):
        return self.get_optional_float("portal", "retry_delay", 5.0, minimum=0.0)

    @property
    def portal_timeout(self):
        return self.get_optional_float("portal", "timeout", 30.0, minimum=1.0)

    # [captcha]

    @property
    def captcha_provider(self):
        return (self.get_optional("captcha", "provider", "remote") or "remote").strip().lower()

    @property
    def captcha_uri(self):
        v = self._secret("captcha", "uri", "COURSEWATCH_CAPTCHA_URI")
        return (v or "http://localhost:8080").rstrip("/")

    @property
    def captcha_timeout(self):
        return self.get_optional_float("captcha", "timeout", 30.0, minimum=1.0)

    # [scheduler]

    @property
    def poll_interval(self):
        return self.get_optional_float("scheduler", "interval", 300.0, minimum=0.0)

    # [store]

    @property
    def store_path(self):
        v = self.get_optional("store", "path")
        if v is None or v.strip() == "":
            v = "./db/watchlist.json"
        return v.strip()

    # [client]

    @property
    def rate_limit_rps(self):
        return self.get_optional_float("client", "rate_limit_rps", 0.0, minimum=0.0)

    @property
    def rate_limit_burst(self):
        return self.get_optional_float("client", "rate_limit_burst", 1.0, minimum=1.0)

    @property
    def is_debug_print_request(self):
        return self.get_optional_bool("client", "debug_print_request", False)

    # [notification]

    @property
    def disable_push(self):
        return self.get_optional_bool("notification", "disable_push", False)

    @property
    def bark_server(self):
        v = self.get_optional("notification", "bark_server")
        if v is None or v.strip() == "":
            v = "https://api.day.app"
        return v.strip().rstrip("/")

    @property
    def notification_timeout(self):
        return self.get_optional_float("notification", "timeout", 10.0, minimum=1.0)

    @property
    def subscribers(self):
        """ { user_id: bark_key } from the [subscriber:<user_id>] sections """
        subs = OrderedDict()
        for id_, s in self.ns_sections("subscriber"):
            key = self.get_optional(s, "bark_key")
            if key is None or key.strip() == "":
                raise UserInputException("Missing bark_key in section %r" % s)
            subs[id_] = key.strip()
        fallback = os.getenv("COURSEWATCH_BARK_TOKEN")
        if not subs and fallback:
            # single-user deployments configure one device through the env
            subs[self.account or ""] = fallback
        return subs

    ## Method

    def check_provider(self, provider):
        if provider not in self.__class__.ALLOWED_PROVIDERS:
            raise UserInputException(
                "unsupported captcha provider %r, valid options are %s"
                % (provider, self.__class__.ALLOWED_PROVIDERS)
            )
