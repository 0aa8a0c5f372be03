from typing import Final

# Record stream the collected observations are emitted to
WEATHER_TOPIC: Final = "local_weather"

# Default polling interval in seconds (3 hours)
DEFAULT_QUERY_INTERVAL: Final = 10800

# Ranked location provider ids
GPS_PROVIDER: Final = "gps"
NETWORK_PROVIDER: Final = "network"

# Recognised weather source ids
SOURCE_OPENWEATHERMAP: Final = "openweathermap"
