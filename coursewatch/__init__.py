#!/usr/bin/env python3
# -*- coding: utf-8 -*-
# filename: __init__.py

__version__ = "0.1.0"
__date__ = "2024.09.14"
