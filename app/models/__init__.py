# Copyright (c) 2025 Shiladitya Mallick
# This file is part of the DAMit! - Daily Accountability project.
# Licensed under the MIT License - see the LICENSE file for details.


from .user import User
from .daily_log import DailyLog
from .goal import Goal
from .notification import NotificationLog
