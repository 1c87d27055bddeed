"""Constants for the Nanoleaf local REST API."""

API_PATH = "api/v1"

DEFAULT_CONFIG_FILE = ".picoleafrc"
DEFAULT_TIMEOUT = 10.0
DEFAULT_WHITE_TEMPERATURE = 6500

# Endpoints (relative to the token path).
PATH_INFO = ""
PATH_STATE = "state"
PATH_EFFECTS_LIST = "effects/effectsList"
PATH_EFFECTS_SELECT = "effects/select"

# State keys.
KEY_ON = "on"
KEY_BRIGHTNESS = "brightness"
KEY_CT = "ct"
KEY_HUE = "hue"
KEY_SAT = "sat"
KEY_COLOR_MODE = "colorMode"
KEY_VALUE = "value"
KEY_MIN = "min"
KEY_MAX = "max"
KEY_DURATION = "duration"

# Effects keys.
KEY_SELECT = "select"
KEY_EFFECTS_LIST = "effectsList"

# Panel info keys.
KEY_NAME = "name"
KEY_SERIAL_NO = "serialNo"
KEY_MANUFACTURER = "manufacturer"
KEY_FIRMWARE_VERSION = "firmwareVersion"
KEY_HARDWARE_VERSION = "hardwareVersion"
KEY_MODEL = "model"
KEY_STATE = "state"
KEY_EFFECTS = "effects"
KEY_PANEL_LAYOUT = "panelLayout"
KEY_RHYTHM = "rhythm"

# Layout keys.
KEY_LAYOUT = "layout"
KEY_NUM_PANELS = "numPanels"
KEY_SIDE_LENGTH = "sideLength"
KEY_POSITION_DATA = "positionData"
KEY_PANEL_ID = "panelId"
KEY_SHAPE_TYPE = "shapeType"
KEY_GLOBAL_ORIENTATION = "globalOrientation"
KEY_X = "x"
KEY_Y = "y"
KEY_O = "o"

# Rhythm keys.
KEY_RHYTHM_CONNECTED = "rhythmConnected"
KEY_RHYTHM_ACTIVE = "rhythmActive"
KEY_RHYTHM_ID = "rhythmId"
KEY_AUX_AVAILABLE = "auxAvailable"
KEY_RHYTHM_MODE = "rhythmMode"
KEY_RHYTHM_POS = "rhythmPos"

# Config file keys.
CONF_HOST = "host"
CONF_ACCESS_TOKEN = "access_token"

# Environment overrides.
ENV_CONFIG = "PICOLEAF_CONFIG"
ENV_HOST = "PICOLEAF_HOST"
ENV_TOKEN = "PICOLEAF_TOKEN"
ENV_VERBOSE = "PICOLEAF_VERBOSE"
