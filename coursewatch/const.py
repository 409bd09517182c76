#!/usr/bin/env python3
# -*- coding: utf-8 -*-
# filename: const.py

from ._internal import get_abs_path as absp

DEFAULT_CONFIG_INI = absp("../config.ini")
CONFIG_INI_ENV = "COURSEWATCH_CONFIG_INI"
LOG_DIR = absp("../log/")

USER_AGENT = (
    "Mozilla/5.0 (Macintosh; Intel Mac OS X 10_15_7) AppleWebKit/605.1.15 "
    "(KHTML, like Gecko) Version/17.4 Safari/605.1.15"
)

# The portal answers with this page whenever it decides the current session
# was driven out of order. The wording is owned by the portal, so any change
# on their side silently disables corruption detection.
CORRUPTION_MARKER = "不合法執行選課系統"

LOGIN_SUCCESS_MARKER = "success:true"


class PortalURL(object):

    Root = "https://cos%ds.ntnu.edu.tw"
    App = "/AasEnrollStudent"

    LoginCheck = App + "/LoginCheckCtrl"
    RandImage = App + "/RandImage"
    Index = App + "/IndexCtrl"
    Login = App + "/LoginCtrl"
    Enroll = App + "/EnrollCtrl"
    CourseQuery = App + "/CourseQueryCtrl"

    @staticmethod
    def root_for(subsite):
        return PortalURL.Root % int(subsite)


NOTIFY_TITLE = "Course seats available"

NOTIFY_BODY = (
    "Seats opened up for:\n%s\n"
    "These courses have been removed from your watchlist. "
    "If you do not actually get a seat, they will be re-added automatically."
)

HELP_TEXT = """\
Available commands:
/help                   show this help menu
/add_course <id>        watch a course
/remove_course <id>     stop watching a course
/list_course            list watched courses
/force_update           poll the portal now (do not spam this command!)"""

