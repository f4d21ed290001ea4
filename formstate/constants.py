"""Field type tags and shared keys."""

CHECKBOX = "checkbox"
COLOR = "color"
DATE = "date"
DATETIME_LOCAL = "datetime-local"
EMAIL = "email"
MONTH = "month"
NUMBER = "number"
PASSWORD = "password"
RADIO = "radio"
RANGE = "range"
SEARCH = "search"
SELECT = "select"
SELECT_MULTIPLE = "select-multiple"
TEL = "tel"
TEXT = "text"
TEXTAREA = "textarea"
TIME = "time"
URL = "url"
WEEK = "week"

LABEL = "label"

TYPES: tuple[str, ...] = (
    CHECKBOX,
    COLOR,
    DATE,
    DATETIME_LOCAL,
    EMAIL,
    MONTH,
    NUMBER,
    PASSWORD,
    RADIO,
    RANGE,
    SEARCH,
    SELECT,
    SELECT_MULTIPLE,
    TEL,
    TEXT,
    TEXTAREA,
    TIME,
    URL,
    WEEK,
)

# Types whose element carries no DOM "type" attribute
UNTYPED_ELEMENTS: frozenset[str] = frozenset({SELECT, SELECT_MULTIPLE, TEXTAREA})

ON_CHANGE_HANDLER = "on_change"
ON_BLUR_HANDLER = "on_blur"

LOGGER_NAME = "formstate"
