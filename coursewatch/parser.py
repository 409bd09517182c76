#!/usr/bin/env python3
# -*- coding: utf-8 -*-
# filename: parser.py

import re
from .const import CORRUPTION_MARKER, LOGIN_SUCCESS_MARKER
from .exceptions import SessionCorruptedError, ExtractionFailedError

# The portal renders everything through inline ExtJS config objects, so these
# patterns follow its script text rather than any HTML structure.
_regexLoginToken = re.compile(r"url:'.+id='\s+\+\s+'(.+)',?")
_regexStdName = re.compile(r"name: ?'stdName',(\r\n.+)+ +value: '(.+)'", re.MULTILINE)
_regexSeatCount = re.compile(r"""['"]Count['"] *: *([0-9]+)""")


def check_response(text):
    if CORRUPTION_MARKER in text:
        raise SessionCorruptedError()


def is_login_success(text):
    return LOGIN_SUCCESS_MARKER in text


def get_login_token(text):
    mat = _regexLoginToken.search(text)
    if mat is None:
        raise ExtractionFailedError(msg="Unable to find login token in LoginCheckCtrl page")
    return mat.group(1)


def get_std_name(text):
    mat = _regexStdName.search(text)
    if mat is None:
        raise ExtractionFailedError(msg="Unable to find stdName in IndexCtrl page")
    return mat.group(2)


def get_seat_count(text):
    mat = _regexSeatCount.search(text)
    if mat is None:
        raise ExtractionFailedError(msg="Unable to find Count in CourseQueryCtrl response")
    return int(mat.group(1))
