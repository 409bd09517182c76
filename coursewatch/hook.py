#!/usr/bin/env python3
# -*- coding: utf-8 -*-
# filename: hook.py

from .logger import ConsoleLogger
from .exceptions import StatusCodeError

cout = ConsoleLogger("hook")


def get_hooks(*fn):
    return {"response": list(fn)}


def merge_hooks(*hooklike):
    funcs = []
    for hook in hooklike:
        if hook is None:
            continue
        if isinstance(hook, dict):
            funcs.extend(hook.get("response", []))
        elif callable(hook):
            funcs.append(hook)
        else:
            funcs.extend(hook)
    return get_hooks(*funcs)


def check_status_code(r, **kwargs):
    if not r.ok:
        raise StatusCodeError(
            msg="%s %s (%s)" % (r.status_code, r.reason, r.url),
            status_code=r.status_code,
        )


def debug_print_request(r, **kwargs):
    cout.debug("> %s %s -> %s (%d bytes)" % (
        r.request.method, r.url, r.status_code, len(r.content or b"")))
