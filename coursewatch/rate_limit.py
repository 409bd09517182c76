#!/usr/bin/env python3
# -*- coding: utf-8 -*-
# filename: rate_limit.py

import threading
import time


class TokenBucket:
    """ Blocking token bucket. ``rate <= 0`` disables throttling. """

    def __init__(self, rate, burst=1.0):
        self.rate = max(0.0, float(rate))
        self.capacity = max(1.0, float(burst))
        self.tokens = self.capacity
        self.last = time.monotonic()
        self._lock = threading.Lock()

    @property
    def enabled(self):
        return self.rate > 0

    def consume(self, tokens=1.0):
        if not self.enabled:
            return 0.0
        waited = 0.0
        while True:
            with self._lock:
                now = time.monotonic()
                elapsed = max(0.0, now - self.last)
                self.tokens = min(self.capacity, self.tokens + elapsed * self.rate)
                self.last = now
                if self.tokens >= tokens:
                    self.tokens -= tokens
                    return waited
                wait = (tokens - self.tokens) / self.rate
            time.sleep(wait)
            waited += wait
