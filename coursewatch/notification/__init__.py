#!/usr/bin/env python3
# -*- coding: utf-8 -*-
# filename: notification/__init__.py
