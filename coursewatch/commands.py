#!/usr/bin/env python3
# -*- coding: utf-8 -*-
# filename: commands.py

import sys
import shlex
import inspect
from .const import HELP_TEXT
from .logger import ConsoleLogger, FileLogger
from .exceptions import UserInputException

cout = ConsoleLogger("commands")
ferr = FileLogger("commands.error")

PREFIX = "/"


def check_course_id(course_id):
    if not course_id or not course_id.isdigit() or not course_id.isascii():
        raise UserInputException(
            "Course ID consists only by decimal digits! `%s` is not a valid one" % course_id
        )
    return course_id


class CommandHandler(object):
    """
    The watchlist management surface. Every command answers the invoking
    user with a reply string; a failing command never affects the others
    or the scheduler.
    """

    def __init__(self, store, trigger):
        self._store = store
        self._trigger = trigger
        self._commands = {
            "help": self.help,
            "add_course": self.add_course,
            "remove_course": self.remove_course,
            "list_course": self.list_course,
            "force_update": self.force_update,
        }

    @property
    def commands(self):
        return sorted(self._commands)

    def help(self, user_id, command=None):
        return HELP_TEXT

    def add_course(self, user_id, course_id=None):
        check_course_id(course_id)
        self._store.add_course(user_id, course_id)
        return "Course added for %s." % course_id

    def remove_course(self, user_id, course_id=None):
        check_course_id(course_id)
        self._store.remove_course(user_id, course_id)
        return "Course removed for %s." % course_id

    def list_course(self, user_id):
        courses = self._store.get(user_id)
        if not courses:
            return "No course registered!"
        return "Current registered courses:\n%s" % "\n".join(courses)

    def force_update(self, user_id):
        if not self._trigger.signal():
            cout.debug("Trigger already pending, dropped (user: %s)" % user_id)
        return "Initiate force update...\n (Do not abuse and spam this command!)"

    def dispatch(self, user_id, line):
        try:
            words = shlex.split(line)
        except ValueError as e:
            return "Unable to parse command: %s" % e
        if not words:
            return None
        name = words[0]
        if name.startswith(PREFIX):
            name = name[len(PREFIX):]
        fn = self._commands.get(name)
        if fn is None:
            return "Unknown command `%s`, try /help" % words[0]

        try:
            inspect.signature(fn).bind(user_id, *words[1:])
        except TypeError:
            return "Wrong arguments for `%s`, try /help" % name

        cout.debug("Executing command %s..." % name)
        try:
            reply = fn(user_id, *words[1:])
        except UserInputException as e:
            reply = str(e)
        except Exception as e:
            ferr.exception(e)
            reply = "Error in command `%s`: %s" % (name, e)
        cout.debug("Done process command %s!" % name)
        return reply


def run_console(handler, stdin=None, stdout=None):
    """
    Read ``<user_id> /command [args]`` lines until EOF and print replies.
    """
    stdin = stdin or sys.stdin
    stdout = stdout or sys.stdout
    for line in stdin:
        line = line.strip()
        if not line or line.startswith("#"):
            continue
        user_id, _, rest = line.partition(" ")
        reply = handler.dispatch(user_id, rest)
        if reply is not None:
            stdout.write("[%s] %s\n" % (user_id, reply))
            stdout.flush()
    cout.info("Console closed")
