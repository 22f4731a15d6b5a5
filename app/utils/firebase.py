# Copyright (c) 2025 Shiladitya Mallick
# This file is part of the DAMit! - Daily Accountability project.
# Licensed under the MIT License - see the LICENSE file for details.

import os
import json
import firebase_admin
from firebase_admin import credentials, messaging


def get_firebase_app():
    """
    Initialize Firebase Admin once, on first use.

    Raises RuntimeError when FIREBASE_ADMIN_JSON is missing so callers can fall
    back to in-app delivery.
    """
    if firebase_admin._apps:
        return firebase_admin.get_app()

    raw_json = os.getenv("FIREBASE_ADMIN_JSON")
    if not raw_json:
        raise RuntimeError("FIREBASE_ADMIN_JSON is not set in environment variables")

    try:
        if raw_json.strip().startswith("{"):
            # 🧠 Stringified JSON
            cred = credentials.Certificate(json.loads(raw_json))
        else:
            # 🧪 Local path to JSON (for dev)
            cred = credentials.Certificate(raw_json)

        return firebase_admin.initialize_app(cred)

    except Exception as e:
        raise RuntimeError("❌ Failed to initialize Firebase Admin SDK") from e


def send_fcm_push(token: str, title: str, body: str, icon: str = None, badge: str = None,
                  tag: str = None, data: dict = None) -> str:
    """
    Send a web push notification via FCM. Returns the FCM message id.
    """
    app = get_firebase_app()
    message = messaging.Message(
        notification=messaging.Notification(title=title, body=body),
        webpush=messaging.WebpushConfig(
            notification=messaging.WebpushNotification(
                title=title,
                body=body,
                icon=icon,
                badge=badge,
                tag=tag,
                require_interaction=False,
                vibrate=[200, 100, 200],
            )
        ),
        token=token,
        data=data or {},
    )
    return messaging.send(message, app=app)
