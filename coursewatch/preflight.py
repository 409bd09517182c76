#!/usr/bin/env python3
# -*- coding: utf-8 -*-

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .exceptions import UserInputException

MIN_POLL_INTERVAL = 60.0


@dataclass(frozen=True)
class PreflightIssue:
    level: str  # "ERROR" | "WARN"
    code: str
    message: str
    key_path: Optional[str] = None


def _is_blank(s) -> bool:
    return s is None or str(s).strip() == ""


def run_preflight(config) -> list[PreflightIssue]:
    """
    Run static config validation. This MUST NOT:
    - perform any network request
    - instantiate captcha recognizers
    """
    issues: list[PreflightIssue] = []

    def _add(level: str, code: str, message: str, key_path: str | None = None):
        issues.append(PreflightIssue(level=level, code=code, message=message, key_path=key_path))

    # [user]
    if _is_blank(config.account):
        _add("ERROR", "credential_missing", "user.account is empty (or set COURSEWATCH_ACCOUNT)",
             key_path="user.account")
    if _is_blank(config.password):
        _add("ERROR", "credential_missing", "user.password is empty (or set COURSEWATCH_PASSWORD)",
             key_path="user.password")

    # [portal] retry budgets
    for key in ("max_retries", "captcha_retry"):
        try:
            value = getattr(config, key)
        except UserInputException as e:
            _add("ERROR", "invalid_value", str(e), key_path="portal.%s" % key)
            continue
        if value < 1:
            _add("ERROR", "retry_budget_invalid", "portal.%s must be >= 1, got %d" % (key, value),
                 key_path="portal.%s" % key)

    # [captcha]
    provider = config.captcha_provider
    try:
        config.check_provider(provider)
    except UserInputException as e:
        _add("ERROR", "captcha_provider_unknown", str(e), key_path="captcha.provider")
    if provider == "dummy":
        _add("WARN", "captcha_provider_dummy", "captcha.provider=dummy will never pass a real login",
             key_path="captcha.provider")

    # [scheduler]
    try:
        interval = config.poll_interval
    except UserInputException as e:
        _add("ERROR", "invalid_value", str(e), key_path="scheduler.interval")
    else:
        if interval < MIN_POLL_INTERVAL:
            _add("WARN", "poll_interval_low",
                 f"scheduler.interval={interval} is below {MIN_POLL_INTERVAL}s and may overload the portal",
                 key_path="scheduler.interval")

    # [notification]
    try:
        subscribers = config.subscribers
    except UserInputException as e:
        _add("ERROR", "invalid_value", str(e), key_path="subscriber")
    else:
        if not config.disable_push and not subscribers:
            _add("WARN", "no_subscribers", "push is enabled but no [subscriber:<id>] section is configured",
                 key_path="subscriber")

    return issues
