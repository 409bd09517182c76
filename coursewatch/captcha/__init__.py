#!/usr/bin/env python3
# -*- coding: utf-8 -*-
# filename: __init__.py

from .registry import CaptchaRecognizer, DummyRecognizer, get_recognizer
from .remote import RemoteRecognizer
from .solver import CaptchaSolver, select_answer

__all__ = [
    "CaptchaRecognizer",
    "DummyRecognizer",
    "RemoteRecognizer",
    "CaptchaSolver",
    "get_recognizer",
    "select_answer",
]
