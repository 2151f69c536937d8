# File: const.py
"""Constants for the NewsPulse integration.

This file centralizes configuration keys, defaults, record keys, API endpoints,
signal and event names, service fields and platform identifiers for consistency
across the integration.
"""

import logging

from homeassistant.const import Platform

# ------------------------------------------------------------------------------------------------
# General / Integration Information
# ------------------------------------------------------------------------------------------------
# Integration Name
NEWSPULSE_TITLE = "NewsPulse"

# Integration Domain
DOMAIN = "newspulse"

# Logger
LOGGER = logging.getLogger(__package__)

# Supported Platforms
PLATFORMS = [
    Platform.BUTTON,
    Platform.SENSOR,
]

# Coordinator
COORDINATOR = "coordinator"
COORDINATOR_SUFFIX = "_coordinator"

# Update Intervals
DEFAULT_UPDATE_INTERVAL = 5  # minutes, full notification list refresh
DEFAULT_BADGE_UPDATE_INTERVAL = 60  # seconds, unread badge polling
DEFAULT_BADGE_AUTO_UPDATE = True
DEFAULT_REQUEST_TIMEOUT = 30  # seconds

DEFAULT_ZERO = 0

# ------------------------------------------------------------------------------------------------
# Configuration Keys
# ------------------------------------------------------------------------------------------------
CONF_URL = "url"
CONF_API_TOKEN = "api_token"
CONF_NOTIFY_SERVICE = "notify_service"
CONF_UPDATE_INTERVAL = "update_interval"
CONF_BADGE_UPDATE_INTERVAL = "badge_update_interval"
CONF_BADGE_AUTO_UPDATE = "badge_auto_update"

CONFIG_FLOW_STEP_USER = "user"
OPTIONS_FLOW_STEP_INIT = "init"

CFOP_ERROR_CANNOT_CONNECT = "cannot_connect"
CFOP_ERROR_INVALID_AUTH = "invalid_auth"
CFOP_ERROR_INVALID_URL = "invalid_url"
CFOP_ABORT_ALREADY_CONFIGURED = "already_configured"

# ------------------------------------------------------------------------------------------------
# Notification Categories
# ------------------------------------------------------------------------------------------------
CATEGORY_ALL = "all"
CATEGORY_NEWS = "news"
CATEGORY_LIKE = "like"
CATEGORY_COMMENT = "comment"
CATEGORY_MENTION = "mention"
CATEGORY_STREAM = "stream"
CATEGORY_SYSTEM = "system"
CATEGORY_PROFILE = "profile"

NOTIFICATION_CATEGORIES = [
    CATEGORY_NEWS,
    CATEGORY_LIKE,
    CATEGORY_COMMENT,
    CATEGORY_MENTION,
    CATEGORY_STREAM,
    CATEGORY_SYSTEM,
    CATEGORY_PROFILE,
]

FILTER_CATEGORIES = [CATEGORY_ALL, *NOTIFICATION_CATEGORIES]

DEFAULT_FILTER_SELECTION = (CATEGORY_ALL,)

ACTION_TYPE_FOLLOW = "follow"

# ------------------------------------------------------------------------------------------------
# Notification Record Keys (backend JSON)
# ------------------------------------------------------------------------------------------------
DATA_NOTIFICATION_ID = "id"
DATA_NOTIFICATION_TYPE = "type"
DATA_NOTIFICATION_TITLE = "title"
DATA_NOTIFICATION_MESSAGE = "message"
DATA_NOTIFICATION_READ = "read"
DATA_NOTIFICATION_REFERENCE_ID = "referenceId"
DATA_NOTIFICATION_REFERENCE_TYPE = "referenceType"
DATA_NOTIFICATION_ACTION_TYPE = "actionType"

# User profile keys
DATA_PROFILE_SETTINGS = "settings"
DATA_PROFILE_NOTIFICATION_SETTINGS = "notificationSettings"

# Notification settings keys (backend JSON)
SETTING_ENABLE_PUSH = "enablePushNotifications"
SETTING_ENABLE_NEWS = "enableNewsNotifications"
SETTING_ENABLE_LIKE = "enableLikeNotifications"
SETTING_ENABLE_COMMENT = "enableCommentNotifications"
SETTING_ENABLE_MENTION = "enableMentionNotifications"
SETTING_ENABLE_STREAM = "enableStreamNotifications"

# ------------------------------------------------------------------------------------------------
# Remote API
# ------------------------------------------------------------------------------------------------
API_BASE_PATH = "/api"
API_ENDPOINT_NOTIFICATIONS = "/notifications"
API_ENDPOINT_NOTIFICATION_READ = "/notifications/{}/read"
API_ENDPOINT_NOTIFICATIONS_READ_ALL = "/notifications/read-all"
API_ENDPOINT_USER = "/user"
API_ENDPOINT_USER_SETTINGS = "/user/settings"

API_METHOD_GET = "GET"
API_METHOD_POST = "POST"
API_METHOD_PUT = "PUT"

API_CONTENT_TYPE_JSON = "application/json"
API_RESPONSE_MESSAGE = "message"

ERROR_API_UNAUTHORIZED = "Unauthorized. Please login."
ERROR_API_FORBIDDEN = "Forbidden. You do not have permission to access this resource."
ERROR_API_RATE_LIMITED = "Too many requests. Please try again later."
ERROR_API_REQUEST_FAILED_FMT = "Request failed with status {}"

# ------------------------------------------------------------------------------------------------
# Badge
# ------------------------------------------------------------------------------------------------
BADGE_DISPLAY_MAX = 99
BADGE_OVERFLOW_DISPLAY = "99+"

BADGE_STATE_IDLE = "idle"
BADGE_STATE_POLLING = "polling"

# ------------------------------------------------------------------------------------------------
# Local Notifications
# ------------------------------------------------------------------------------------------------
DEFAULT_SCHEDULE_DELAY_SECONDS = 1
DEFAULT_TEST_REFERENCE_ID = 1

PERMISSION_UNDETERMINED = "undetermined"
PERMISSION_GRANTED = "granted"
PERMISSION_DENIED = "denied"

# Notify service payload keys
NOTIFY_DOMAIN = "notify"
NOTIFY_TITLE = "title"
NOTIFY_MESSAGE = "message"
NOTIFY_DATA = "data"
NOTIFY_ACTIONS = "actions"
NOTIFY_ACTION = "action"
NOTIFY_TAG = "tag"

DISPLAY_DOT = "."

# Action string (mobile companion app action buttons)
ACTION_OPEN_NOTIFICATION = "NEWSPULSE_OPEN"
ACTION_SEPARATOR = "|"
ACTION_ENTRY_ID_LENGTH = 8
ACTION_TITLE_OPEN = "Open"

# Notification response kinds
RESPONSE_DELIVERED = "delivered"
RESPONSE_OPENED = "opened"

# Delivered payloads kept per platform for routing later taps
DELIVERED_PAYLOAD_HISTORY = 50

# Incoming companion app event
NOTIFICATION_EVENT = "mobile_app_notification_action"

# ------------------------------------------------------------------------------------------------
# Events (Home Assistant bus)
# ------------------------------------------------------------------------------------------------
EVENT_BADGE_PULSE = f"{DOMAIN}_badge_pulse"
EVENT_MARK_ALL_READ_FAILED = f"{DOMAIN}_mark_all_read_failed"
EVENT_NOTIFICATION_DELIVERED = f"{DOMAIN}_notification_delivered"

EVENT_DATA_COUNT = "count"
EVENT_DATA_PREVIOUS = "previous"
EVENT_DATA_ENTRY_ID = "entry_id"
EVENT_DATA_RESTORED_UNREAD = "restored_unread"
EVENT_DATA_ERROR = "error"
EVENT_DATA_SCHEDULE_ID = "schedule_id"
EVENT_DATA_PAYLOAD = "payload"

# ------------------------------------------------------------------------------------------------
# Signals (instance-scoped dispatcher suffixes)
# ------------------------------------------------------------------------------------------------
SIGNAL_PREFIX = f"{DOMAIN}_"
SIGNAL_SUFFIX_NOTIFICATIONS_LOADED = "notifications_loaded"
SIGNAL_SUFFIX_READ_STATE_CHANGED = "read_state_changed"
SIGNAL_SUFFIX_BADGE_UPDATED = "badge_updated"
SIGNAL_SUFFIX_PERMISSION_CHANGED = "permission_changed"

# ------------------------------------------------------------------------------------------------
# Services
# ------------------------------------------------------------------------------------------------
SERVICE_REFRESH_NOTIFICATIONS = "refresh_notifications"
SERVICE_MARK_READ = "mark_read"
SERVICE_MARK_ALL_READ = "mark_all_read"
SERVICE_SET_FILTER = "set_filter"
SERVICE_TOGGLE_FILTER = "toggle_filter"
SERVICE_SEND_TEST_NOTIFICATION = "send_test_notification"
SERVICE_REQUEST_PERMISSION = "request_permission"
SERVICE_SET_BADGE_COUNT = "set_badge_count"
SERVICE_UPDATE_SETTINGS = "update_settings"

FIELD_CONFIG_ENTRY_ID = "config_entry_id"
FIELD_NOTIFICATION_ID = "notification_id"
FIELD_CATEGORIES = "categories"
FIELD_CATEGORY = "category"
FIELD_TITLE = "title"
FIELD_MESSAGE = "message"
FIELD_TYPE = "type"
FIELD_REFERENCE_ID = "reference_id"
FIELD_REFERENCE_TYPE = "reference_type"
FIELD_DELAY_SECONDS = "delay_seconds"
FIELD_COUNT = "count"
FIELD_ENABLE_PUSH = "enable_push"
FIELD_ENABLE_NEWS = "enable_news"
FIELD_ENABLE_LIKE = "enable_like"
FIELD_ENABLE_COMMENT = "enable_comment"
FIELD_ENABLE_MENTION = "enable_mention"
FIELD_ENABLE_STREAM = "enable_stream"

MSG_NO_ENTRY_FOUND = "No NewsPulse entry found"
ERROR_ENTRY_NOT_LOADED_FMT = "NewsPulse entry {} is not loaded"
ERROR_EMPTY_TITLE_OR_MESSAGE = "Both a title and a message are required"
ERROR_NEGATIVE_DELAY = "Delay must not be negative"
ERROR_NOT_SCHEDULED = (
    "Notification not scheduled: notification permission was not granted"
)
ERROR_MARK_READ_FAILED_FMT = "Failed to mark notification {} as read"
ERROR_MARK_ALL_READ_FAILED = "Failed to mark all notifications as read"
ERROR_FETCH_FAILED = "Failed to fetch notifications"
ERROR_SETTINGS_UPDATE_FAILED = "Failed to update notification settings"
ERROR_SCHEDULING_FAILED = "Failed to schedule local notification"
ERROR_NO_NOTIFY_SERVICE = "No notify service configured"

# ------------------------------------------------------------------------------------------------
# Entities
# ------------------------------------------------------------------------------------------------
SENSOR_UID_SUFFIX_UNREAD_BADGE = "_unread_badge"
SENSOR_UID_SUFFIX_NOTIFICATIONS = "_notifications"
SENSOR_UID_SUFFIX_PERMISSION = "_permission"
BUTTON_UID_SUFFIX_MARK_ALL_READ = "_mark_all_read"
BUTTON_UID_SUFFIX_REFRESH = "_refresh"

SENSOR_EID_UNREAD_BADGE = f"sensor.{DOMAIN}_unread_badge"
SENSOR_EID_NOTIFICATIONS = f"sensor.{DOMAIN}_notifications"
SENSOR_EID_PERMISSION = f"sensor.{DOMAIN}_notification_permission"
BUTTON_EID_MARK_ALL_READ = f"button.{DOMAIN}_mark_all_read"
BUTTON_EID_REFRESH = f"button.{DOMAIN}_refresh"

TRANS_KEY_SENSOR_UNREAD_BADGE = "unread_badge"
TRANS_KEY_SENSOR_NOTIFICATIONS = "notifications"
TRANS_KEY_SENSOR_PERMISSION = "notification_permission"
TRANS_KEY_BUTTON_MARK_ALL_READ = "mark_all_read"
TRANS_KEY_BUTTON_REFRESH = "refresh"

ATTR_DISPLAY = "display"
ATTR_VISIBLE = "visible"
ATTR_DRIVER_STATE = "driver_state"
ATTR_EXTERNAL_COUNT = "external_count"
ATTR_AUTO_UPDATE = "auto_update"
ATTR_NOTIFICATIONS = "notifications"
ATTR_FILTER = "filter"
ATTR_TOTAL_COUNT = "total_count"
ATTR_UNREAD_COUNT = "unread_count"
ATTR_STORE_VERSION = "store_version"
ATTR_SETTINGS = "settings"

UNIT_NOTIFICATIONS = "notifications"

ICON_BADGE_EMPTY = "mdi:bell-outline"
ICON_BADGE_UNREAD = "mdi:bell-badge"
ICON_NOTIFICATIONS = "mdi:bell-ring-outline"
ICON_PERMISSION = "mdi:shield-check-outline"
ICON_MARK_ALL_READ = "mdi:email-open-multiple-outline"
ICON_REFRESH = "mdi:refresh"

# Diagnostics
DIAG_ENTRY = "entry"
DIAG_OPTIONS = "options"
DIAG_STORE = "store"
DIAG_VERSION = "version"
DIAG_GENERATION = "generation"
DIAG_RECORDS = "records"
DIAG_FILTER = "filter"
DIAG_SETTINGS = "settings"
DIAG_BADGE = "badge"
DIAG_PERMISSION = "permission"
