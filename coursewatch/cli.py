#!/usr/bin/env python3
# -*- coding: utf-8 -*-
# filename: cli.py

import signal
from optparse import OptionParser
from threading import Thread, Event
from . import __version__, __date__

SHUTDOWN_JOIN_TIMEOUT = 5.0


def create_default_parser():

    parser = OptionParser(
        description='Course seat watcher v%s (%s)' % (__version__, __date__),
        version=__version__,
    )

    ## custom input files

    parser.add_option(
        '-c',
        '--config',
        dest='config_ini',
        metavar="FILE",
        help='custom config file encoded with utf8',
    )

    ## boolean (flag) options

    parser.add_option(
        '-i',
        '--interactive',
        dest='interactive',
        action='store_true',
        default=False,
        help='read watchlist commands ("<user_id> /command [args]") from stdin',
    )

    return parser


def create_default_threads(options, scheduler, handler):

    from .commands import run_console

    tList = []

    t = Thread(target=scheduler.run, name="Scheduler")
    tList.append(t)

    if options.interactive:
        t = Thread(target=run_console, args=(handler,), name="Console")
        tList.append(t)

    return tList


def run(argv=None):

    from .config import CourseWatchConfig
    from .logger import ConsoleLogger
    from .preflight import run_preflight
    from .watchlist import WatchlistStore
    from .notification.bark_push import Notify
    from .loop import Scheduler
    from .commands import CommandHandler

    cout = ConsoleLogger("cli")

    parser = create_default_parser()
    options, args = parser.parse_args(argv)

    config = CourseWatchConfig(options.config_ini)

    issues = run_preflight(config)
    for issue in issues:
        if issue.level == "ERROR":
            cout.error("[%s] %s" % (issue.code, issue.message))
        else:
            cout.warning("[%s] %s" % (issue.code, issue.message))
    if any(issue.level == "ERROR" for issue in issues):
        return 1

    store = WatchlistStore.from_config(config)
    notify = Notify.from_config(config)
    scheduler = Scheduler.from_config(config, store, notify)
    handler = CommandHandler(store, scheduler.trigger)

    shutdown = Event()

    def _on_signal(signum, frame):
        cout.info("Received signal %d, shutting down" % signum)
        shutdown.set()

    signal.signal(signal.SIGTERM, _on_signal)

    tList = create_default_threads(options, scheduler, handler)
    for t in tList:
        t.daemon = True
        t.start()

    # whichever finishes first (a worker thread or a signal) stops the rest
    try:
        while not shutdown.is_set():
            finished = [t for t in tList if not t.is_alive()]
            if finished:
                cout.warning("Thread %s finished, shutting down" % finished[0].name)
                break
            shutdown.wait(1.0)
    except KeyboardInterrupt:
        cout.info("Interrupted, shutting down")
    finally:
        scheduler.stop()

    for t in tList:
        t.join(timeout=SHUTDOWN_JOIN_TIMEOUT)
    return 0
