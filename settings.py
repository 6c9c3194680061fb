from config.loader import get_config_loader

# Get the config loader instance
config = get_config_loader()

# Kinvey application identity (from the Kinvey Console)
# Left unset these hold the placeholder and fail validation before any request
KINVEY_APP_ID = config.get_required("KINVEY_APP_ID")
KINVEY_APP_SECRET = config.get_required("KINVEY_APP_SECRET")
# Redirect URI configured for the app in the console
KINVEY_REDIRECT_URI = config.get_required("KINVEY_REDIRECT_URI")

# Instance names. If not running on multi-tenant change these to your
# dedicated instance, eg vmwus1-auth and vmwus1-baas
KINVEY_AUTH_INSTANCE = config.get("KINVEY_AUTH_INSTANCE", "auth")
KINVEY_DATA_INSTANCE = config.get("KINVEY_DATA_INSTANCE", "baas")

# Key under _socialIdentity that binds the MIC access token to a Kinvey user
KINVEY_IDENTITY_PROVIDER = config.get("KINVEY_IDENTITY_PROVIDER", "kinveyAuth")

# Exchange the MIC access token for a Kinvey session token after login
KINVEY_SESSION_EXCHANGE = config.get("KINVEY_SESSION_EXCHANGE", False)

# Timeout applied to every request in the flow (seconds)
MIC_REQUEST_TIMEOUT = config.get("MIC_REQUEST_TIMEOUT", 30.0)

# Logging
LOG_LEVEL = config.get("LOG_LEVEL", "warning")
DEBUG_LOG_FILE = config.get("DEBUG_LOG_FILE", "mic_debug.log")
