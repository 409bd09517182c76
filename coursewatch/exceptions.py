#!/usr/bin/env python3
# -*- coding: utf-8 -*-
# filename: exceptions.py

__all__ = [

    "CourseWatchException",
    "UserInputException",

    "CourseWatchClientException",
    "StatusCodeError",
    "SessionCorruptedError",
    "ExtractionFailedError",
    "LoginExhaustedError",
    "QueryExhaustedError",

    "CaptchaServiceError",
    "ServiceHttpError",
    "TransportError",
    "NoViableAnswerError",
    "InvalidResponseError",
    "CaptchaParseError",
    "CAPTCHA_RETRYABLE_ERRORS",

    ]


class CourseWatchException(Exception):
    """ Abstract Exception """

    def __init__(self, *args, **kwargs):
        msg = kwargs.pop("msg", None)
        if msg is None:
            msg = self.__class__.__doc__ or ""
        super().__init__(msg, *args)
        self.msg = msg

    def __str__(self):
        return self.msg


class UserInputException(CourseWatchException, ValueError):
    """ Invalid user input """

    def __init__(self, *args, **kwargs):
        if args and "msg" not in kwargs:
            kwargs["msg"] = str(args[0])
            args = args[1:]
        super().__init__(*args, **kwargs)


class CourseWatchClientException(CourseWatchException):
    """ Abstract Exception """


class StatusCodeError(CourseWatchClientException):
    """ Unexpected HTTP status code """

    def __init__(self, *args, **kwargs):
        self.status_code = kwargs.pop("status_code", None)
        super().__init__(*args, **kwargs)


class SessionCorruptedError(CourseWatchClientException):
    """ Course system entered invalid state """


class ExtractionFailedError(CourseWatchClientException):
    """ Page markup did not match the expected pattern """


class LoginExhaustedError(CourseWatchClientException):
    """ Login max retry reached """


class QueryExhaustedError(CourseWatchClientException):
    """ Query max retry reached """


class CaptchaServiceError(CourseWatchException):
    """ Abstract Exception """


class ServiceHttpError(CaptchaServiceError):
    """ Captcha service responded with an unexpected status """

    def __init__(self, status, *args, **kwargs):
        self.status = status
        kwargs.setdefault("msg", "Captcha service respond status: %s" % status)
        super().__init__(*args, **kwargs)


class TransportError(CaptchaServiceError):
    """ Unable to reach the captcha service """


class NoViableAnswerError(CaptchaServiceError):
    """ No viable captcha answer """


class InvalidResponseError(CaptchaServiceError):
    """ Captcha service response invalid """


class CaptchaParseError(CaptchaServiceError):
    """ Unable to parse captcha expression """

    def __init__(self, text, *args, **kwargs):
        self.text = text
        kwargs.setdefault("msg", "Captcha parse error: %r" % text)
        super().__init__(*args, **kwargs)


# A fresh image is worth another try; the service itself is fine.
CAPTCHA_RETRYABLE_ERRORS = (NoViableAnswerError, InvalidResponseError, CaptchaParseError)
