# Copyright (c) 2025 Shiladitya Mallick
# This file is part of the DAMit! - Daily Accountability project.
# Licensed under the MIT License - see the LICENSE file for details.


class DamitError(Exception):
    status_code = 500

    def __init__(self, detail: str):
        super().__init__(detail)
        self.detail = detail


class NotAuthenticated(DamitError):
    status_code = 401


class LogValidationError(DamitError):
    status_code = 400


class ShareLinkError(DamitError):
    status_code = 404


class ShareLinkExpired(ShareLinkError):
    status_code = 410


class TransientIOError(DamitError):
    status_code = 503


class NotificationPermissionDenied(DamitError):
    status_code = 403
