"""Limites e constantes para validação de payloads da LINE Messaging API."""

from line_messaging.domain.enums import BubbleSize, FlexComponentType

# Mensagens
MAX_MESSAGES_PER_REQUEST = 5
MAX_MULTICAST_RECIPIENTS = 500
MAX_TEXT_LENGTH = 2000
MAX_ALT_TEXT_LENGTH = 400
MAX_URL_LENGTH = 1000
MAX_FLEX_URL_LENGTH = 2000
MAX_LOCATION_TITLE_LENGTH = 100
MAX_LOCATION_ADDRESS_LENGTH = 100

# Actions
MAX_ACTION_LABEL_LENGTH = 20
MAX_IMAGE_CAROUSEL_LABEL_LENGTH = 12
MAX_IMAGEMAP_LABEL_LENGTH = 50
MAX_POSTBACK_DATA_LENGTH = 300
MAX_ACTION_TEXT_LENGTH = 300
MAX_IMAGEMAP_MESSAGE_TEXT_LENGTH = 400
MAX_EXTERNAL_LINK_LABEL_LENGTH = 30

# Estruturas
MAX_IMAGEMAP_ACTIONS = 50
MAX_BUTTONS_TEMPLATE_ACTIONS = 4
CONFIRM_TEMPLATE_ACTIONS = 2
MAX_CAROUSEL_COLUMN_ACTIONS = 3
MAX_CAROUSEL_COLUMNS = 10
MAX_FLEX_CAROUSEL_BUBBLES = 10
MAX_QUICK_REPLY_ITEMS = 13
MAX_RICH_MENU_AREAS = 20
MAX_NARROWCAST_AUDIENCES = 10

# Templates
MAX_TEMPLATE_TITLE_LENGTH = 40
MAX_BUTTONS_TEXT_LENGTH = 160
MAX_CAROUSEL_TEXT_LENGTH = 120
MAX_TEXT_WITH_IMAGE_OR_TITLE_LENGTH = 60
MAX_CONFIRM_TEXT_LENGTH = 240

# Rich menu
MAX_RICH_MENU_NAME_LENGTH = 300
MAX_RICH_MENU_CHAT_BAR_TEXT_LENGTH = 14
RICH_MENU_SIZES = frozenset(
    {
        (2500, 1686),
        (2500, 843),
        (1200, 810),
        (1200, 405),
        (800, 540),
        (800, 270),
    }
)

# Esquemas de URL
ACTION_URI_SCHEMES = ("http", "https", "line", "tel")
ASSET_URL_SCHEMES = ("https",)

# Valores enumerados
FLEX_SPACING_SIZES = ("none", "xs", "sm", "md", "lg", "xl", "xxl")
FLEX_SPACER_SIZES = ("xs", "sm", "md", "lg", "xl", "xxl")
FLEX_TEXT_SIZES = ("xxs", "xs", "sm", "md", "lg", "xl", "xxl", "3xl", "4xl", "5xl")
FLEX_IMAGE_SIZES = (*FLEX_TEXT_SIZES, "full")
FLEX_ALIGNS = ("start", "end", "center")
FLEX_GRAVITIES = ("top", "bottom", "center")
FLEX_WEIGHTS = ("regular", "bold")
FLEX_STYLES = ("normal", "italic")
FLEX_DECORATIONS = ("none", "underline", "line-through")
FLEX_BUTTON_HEIGHTS = ("sm", "md")
FLEX_BUTTON_STYLES = ("link", "primary", "secondary")
FLEX_ASPECT_MODES = ("cover", "fit")
FLEX_DIRECTIONS = ("ltr", "rtl")
DEFAULT_BUBBLE_SIZE = BubbleSize.MEGA
# Componentes permitidos em box com layout baseline
BASELINE_COMPONENTS = frozenset(
    {
        FlexComponentType.ICON,
        FlexComponentType.TEXT,
        FlexComponentType.FILLER,
        FlexComponentType.SPACER,
    }
)

TEMPLATE_IMAGE_ASPECT_RATIOS = ("rectangle", "square")
TEMPLATE_IMAGE_SIZES = ("cover", "contain")

# Demographic filters (ordem crescente importa para gte/lt)
DEMOGRAPHIC_GENDERS = ("male", "female")
DEMOGRAPHIC_APP_TYPES = ("ios", "android")
DEMOGRAPHIC_AGES = (
    "age_15",
    "age_20",
    "age_25",
    "age_30",
    "age_35",
    "age_40",
    "age_45",
    "age_50",
)
DEMOGRAPHIC_SUBSCRIPTION_PERIODS = ("day_7", "day_30", "day_90", "day_180", "day_365")
DEMOGRAPHIC_AREAS = frozenset(
    [f"jp_{i:02d}" for i in range(1, 48)]
    + [f"tw_{i:02d}" for i in range(1, 23)]
    + [f"th_{i:02d}" for i in range(1, 9)]
    + [f"id_{i:02d}" for i in range(1, 13)]
)
