#!/usr/bin/env python3
# -*- coding: utf-8 -*-
# filename: watchlist.py

import os
import json
import threading
from collections import OrderedDict
from contextlib import contextmanager
from .logger import ConsoleLogger
from ._internal import mkdir

cout = ConsoleLogger("watchlist")


class ReadWriteLock(object):
    """ Many readers or one writer. Writers are preferred once waiting. """

    def __init__(self):
        self._cond = threading.Condition(threading.Lock())
        self._readers = 0
        self._writer = False
        self._writers_waiting = 0

    @contextmanager
    def read(self):
        with self._cond:
            while self._writer or self._writers_waiting:
                self._cond.wait()
            self._readers += 1
        try:
            yield
        finally:
            with self._cond:
                self._readers -= 1
                if self._readers == 0:
                    self._cond.notify_all()

    @contextmanager
    def write(self):
        with self._cond:
            self._writers_waiting += 1
            while self._writer or self._readers:
                self._cond.wait()
            self._writers_waiting -= 1
            self._writer = True
        try:
            yield
        finally:
            with self._cond:
                self._writer = False
                self._cond.notify_all()


def _normalize(courses):
    return sorted(set(courses))


class WatchlistStore(object):
    """
    user id -> sorted, deduplicated list of course ids, persisted as one JSON
    document. Each public method holds the lock for exactly one read or one
    write; nothing here ever spans a network call.
    """

    def __init__(self, path=None):
        self._path = path
        self._lock = ReadWriteLock()
        self._data = OrderedDict()
        if path is not None and os.path.exists(path):
            with open(path, "r", encoding="utf-8") as fp:
                raw = json.load(fp)
            for user_id, courses in raw.items():
                self._data[str(user_id)] = _normalize(courses)
            cout.info("Watchlist loaded: %s (%d users)" % (path, len(self._data)))

    @classmethod
    def from_config(cls, config):
        return cls(config.store_path)

    def _flush(self, data):
        if self._path is None:
            return
        folder = os.path.dirname(os.path.abspath(self._path))
        mkdir(folder)
        tmp = self._path + ".tmp"
        with open(tmp, "w", encoding="utf-8") as fp:
            json.dump(data, fp, ensure_ascii=False, indent=2)
        os.replace(tmp, self._path)

    def _commit(self, user_id, courses):
        # memory only changes once the file is written
        data = OrderedDict(self._data)
        data[user_id] = _normalize(courses)
        self._flush(data)
        self._data = data
        return list(data[user_id])

    def get(self, user_id):
        with self._lock.read():
            return list(self._data.get(user_id, []))

    def set(self, user_id, courses):
        with self._lock.write():
            self._commit(user_id, courses)

    def iterate(self):
        with self._lock.read():
            return [(user_id, list(courses)) for user_id, courses in self._data.items()]

    def add_course(self, user_id, course_id):
        with self._lock.write():
            return self._commit(user_id, self._data.get(user_id, []) + [course_id])

    def remove_course(self, user_id, course_id):
        with self._lock.write():
            current = self._data.get(user_id, [])
            return self._commit(user_id, [c for c in current if c != course_id])
