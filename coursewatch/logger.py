#!/usr/bin/env python3
# -*- coding: utf-8 -*-
# filename: logger.py

import os
import logging
from logging.handlers import TimedRotatingFileHandler
from .const import LOG_DIR
from ._internal import mkdir


class BaseLogger(object):

    default_level = logging.DEBUG
    _formatter = None

    def __init__(self, name, level=None):
        if self.__class__ is __class__:
            raise NotImplementedError
        self._name = name
        self._level = level if level is not None else self.__class__.default_level
        self._logger = logging.getLogger(self._name)
        self._logger.setLevel(self._level)
        if not self._logger.handlers:
            self._logger.addHandler(self._get_handler())

    @property
    def name(self):
        return self._name

    @property
    def level(self):
        return self._level

    def _get_handler(self):
        raise NotImplementedError

    def debug(self, msg, *args, **kwargs):
        return self._logger.debug(msg, *args, **kwargs)

    def info(self, msg, *args, **kwargs):
        return self._logger.info(msg, *args, **kwargs)

    def warning(self, msg, *args, **kwargs):
        return self._logger.warning(msg, *args, **kwargs)

    def error(self, msg, *args, **kwargs):
        return self._logger.error(msg, *args, **kwargs)

    def exception(self, msg, *args, exc_info=True, **kwargs):
        return self._logger.exception(msg, *args, exc_info=exc_info, **kwargs)


class ConsoleLogger(BaseLogger):
    """ Log to stderr """

    default_level = logging.DEBUG
    _formatter = logging.Formatter("[%(levelname)s] %(name)s, %(asctime)s, %(message)s", "%H:%M:%S")

    def _get_handler(self):
        handler = logging.StreamHandler()
        handler.setLevel(self.level)
        handler.setFormatter(self.__class__._formatter)
        return handler


class FileLogger(BaseLogger):
    """ Log to a daily rotated file under log/, warnings and above by default """

    default_level = logging.WARNING
    _formatter = logging.Formatter("[%(levelname)s] %(name)s, %(asctime)s, %(message)s", "%Y-%m-%d %H:%M:%S")

    def _get_handler(self):
        mkdir(LOG_DIR)
        file = os.path.join(LOG_DIR, "%s.log" % self.name)
        handler = TimedRotatingFileHandler(file, when="d", interval=1, encoding="utf-8", delay=True)
        handler.setLevel(self.level)
        handler.setFormatter(self.__class__._formatter)
        return handler
