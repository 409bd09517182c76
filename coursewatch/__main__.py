#!/usr/bin/env python3
# -*- coding: utf-8 -*-
# filename: __main__.py

import sys
from .cli import run

sys.exit(run())
