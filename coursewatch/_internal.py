#!/usr/bin/env python3
# -*- coding: utf-8 -*-
# filename: _internal.py

import os

_ROOT = os.path.dirname(os.path.abspath(__file__))


def get_abs_path(path):
    return os.path.normpath(os.path.join(_ROOT, path))


def mkdir(path):
    if not os.path.exists(path):
        os.makedirs(path, exist_ok=True)
