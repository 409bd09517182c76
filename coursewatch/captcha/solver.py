#!/usr/bin/env python3
# -*- coding: utf-8 -*-
# filename: solver.py

import re
from .registry import get_recognizer
from ..exceptions import NoViableAnswerError, InvalidResponseError, CaptchaParseError

_regexCalc = re.compile(r"([0-9])([+x\-])([0-9])")

_OPERATORS = {
    "+": lambda a, b: a + b,
    "-": lambda a, b: a - b,
    "x": lambda a, b: a * b,
}


def _to_int(text):
    try:
        return int(text)
    except ValueError:
        raise CaptchaParseError(text)


def select_answer(candidates):
    """
    Pick the final answer among the recognizer's guesses.

    The portal shows either plain text or a one-digit arithmetic challenge
    such as ``2x3``. Any guess that looks like such a challenge wins and is
    evaluated, wherever it sits in the list; otherwise the last guess is
    used verbatim.
    """
    last = None
    for candidate in candidates:
        mat = _regexCalc.search(candidate)
        if mat is None:
            last = candidate
            continue
        lhs = _to_int(mat.group(1))
        rhs = _to_int(mat.group(3))
        op = _OPERATORS.get(mat.group(2))
        if op is None:
            raise InvalidResponseError(msg="Unknown captcha operator: %r" % mat.group(2))
        return str(op(lhs, rhs))
    if last is None:
        raise NoViableAnswerError()
    return last


class CaptchaSolver(object):

    def __init__(self, recognizer=None, config=None):
        if recognizer is None:
            recognizer = get_recognizer(config=config)
        self._recognizer = recognizer

    def solve(self, raw):
        return select_answer(self._recognizer.recognize(raw))
