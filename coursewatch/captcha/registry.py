#!/usr/bin/env python3
# -*- coding: utf-8 -*-
# filename: registry.py

from ..exceptions import UserInputException


class CaptchaRecognizer(object):
    """
    A black-box recognizer. ``recognize`` takes the raw image bytes and
    returns the list of candidate strings the backend came up with, best
    effort ordered as the backend returned them.
    """

    name = None

    def __init__(self, config=None):
        self._config = config

    def recognize(self, raw):
        raise NotImplementedError


_REGISTRY = {}


def register_recognizer(cls):
    name = getattr(cls, "name", None)
    if not name:
        raise ValueError("Recognizer must define a non-empty 'name'")
    _REGISTRY[name] = cls
    return cls


def get_recognizer(name=None, config=None):
    if name is None and config is not None:
        name = config.captcha_provider
    name = (name or "").strip().lower()
    if not name:
        name = "remote"
    cls = _REGISTRY.get(name)
    if cls is None:
        raise UserInputException(msg="Unknown captcha provider: %s" % name)
    return cls(config)


@register_recognizer
class DummyRecognizer(CaptchaRecognizer):
    name = "dummy"

    def recognize(self, raw):
        return ["0000"]
