#!/usr/bin/env python3
# -*- coding: utf-8 -*-
# filename: loop.py

import threading
from queue import Queue, Empty, Full
from collections import OrderedDict
from requests.exceptions import RequestException
from . import __version__, __date__
from .const import NOTIFY_TITLE, NOTIFY_BODY
from .crawler import CrawlerManager
from .logger import ConsoleLogger, FileLogger
from .exceptions import CourseWatchException

cout = ConsoleLogger("loop")
ferr = FileLogger("loop.error")  # child of "loop", also shows up on console


class ManualTrigger(object):
    """
    Capacity-one wake-up signal for the scheduler. A trigger sent while one is
    still pending is dropped, so spamming it costs at most one extra pass.
    """

    def __init__(self):
        self._queue = Queue(maxsize=1)

    def signal(self):
        try:
            self._queue.put_nowait(True)
        except Full:
            return False
        return True

    def wait(self, timeout):
        try:
            self._queue.get(timeout=timeout)
        except Empty:
            return False
        return True

    def pending(self):
        return self._queue.qsize() > 0


class Scheduler(object):

    def __init__(self, manager, store, notify, interval=300.0, trigger=None):
        self._manager = manager
        self._store = store
        self._notify = notify
        self._interval = interval
        self._trigger = trigger or ManualTrigger()
        self._stop_event = threading.Event()
        self._initialized = False
        self.loop_count = 0

    @classmethod
    def from_config(cls, config, store, notify, trigger=None, manager=None):
        if manager is None:
            manager = CrawlerManager.from_config(config)
        return cls(manager, store, notify, interval=config.poll_interval, trigger=trigger)

    @property
    def trigger(self):
        return self._trigger

    @property
    def stopped(self):
        return self._stop_event.is_set()

    def stop(self):
        self._stop_event.set()
        self._trigger.signal()

    def _ensure_session(self):
        if self._initialized:
            return True
        try:
            self._manager.init()
        except (CourseWatchException, RequestException) as e:
            ferr.error("Session init failed: %s" % e)
            return False
        self._initialized = True
        return True

    def _query(self, user_id, course_id):
        try:
            return self._manager.query(course_id)
        except (CourseWatchException, RequestException) as e:
            ferr.error("Query %s for %s failed: %s" % (course_id, user_id, e))
        except Exception as e:
            ferr.exception(e)
        return None

    def _commit(self, user_id, available):
        # re-read: the user may have edited the list while we were polling
        try:
            current = self._store.get(user_id)
            self._store.set(user_id, [c for c in current if c not in available])
        except (OSError, CourseWatchException) as e:
            # the list is unchanged, so these courses are polled again next pass
            ferr.exception(e)
        text = NOTIFY_BODY % "\n".join(available)
        if not self._notify.send_direct_message(user_id, text, title=NOTIFY_TITLE):
            cout.warning("Unable to notify %s about %s" % (user_id, ", ".join(available)))

    def run_pass(self):
        """
        Poll every watched course once. Returns { user_id: [available course ids] }
        for the users that got something.
        """
        result = OrderedDict()
        if not self._ensure_session():
            return result

        for user_id, courses in self._store.iterate():
            if self.stopped:
                break
            available = []
            for course_id in courses:
                if self.stopped:
                    break
                ok = self._query(user_id, course_id)
                if ok is None:
                    continue
                if ok:
                    cout.info("Course %s is available (user: %s)" % (course_id, user_id))
                    available.append(course_id)
                else:
                    cout.debug("Course %s is still full (user: %s)" % (course_id, user_id))
            if available:
                self._commit(user_id, available)
                result[user_id] = available
        return result

    def run(self):
        header = "# coursewatch v%s (%s) #" % (__version__, __date__)
        line = "#" + "-" * (len(header) - 2) + "#"
        cout.info(line)
        cout.info(header)
        cout.info(line)
        cout.info("poll_interval: %s" % self._interval)

        while not self.stopped:
            self.loop_count += 1
            cout.info("")
            cout.info("======== Pass %d ========" % self.loop_count)
            cout.info("")
            try:
                self.run_pass()
            except Exception as e:
                ferr.exception(e)
            if self.stopped:
                break
            if self._trigger.wait(self._interval):
                cout.info("Woken up by trigger")

        cout.info("Quit scheduler loop")
