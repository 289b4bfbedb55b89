"""
Configuración global de ClimaMapX
"""

# ============================================================
# FUENTE DE ESTACIONES (GeoJSON)
# ============================================================
STATIONS_GEOJSON_URL = (
    "https://api.weather.gc.ca/collections/climate-stations/items"
    "?f=json&limit=10000"
)
STATIONS_TIMEOUT_SECONDS = 30
STATIONS_CACHE_TTL_SECONDS = 60 * 60  # El listado de estaciones casi no cambia

# ============================================================
# API DE DATOS CLIMÁTICOS DIARIOS (MSC GeoMet)
# ============================================================
CLIMATE_API_BASE = "https://api.weather.gc.ca/collections/climate-daily"
CLIMATE_TIMEOUT_SECONDS = 15
CLIMATE_TARGET_YEAR = 2025
CLIMATE_RECORD_LIMIT = 10
CLIMATE_SORT = "-LOCAL_DATE"
HTTP_USER_AGENT = "ClimaMapX/1.0"

# ============================================================
# MAPA
# ============================================================
MAP_CENTER = (56.0, -96.0)  # Canadá
MAP_ZOOM = 4
MAP_HEIGHT_PX = 640
STATIONS_LAYER_NAME = "Weather stations"

# ============================================================
# UMBRALES DE ELEVACIÓN (m)
# ============================================================
ELEVATION_LOW_MAX = 200    # Bajo: e < 200
ELEVATION_MEDIUM_MAX = 500  # Medio: 200 <= e <= 500; Alto: e > 500

COLOR_LOW = "#1a9850"
COLOR_MEDIUM = "#fee08b"
COLOR_HIGH = "#d73027"

# ============================================================
# ESTILO DE MARCADORES
# ============================================================
MARKER_RADIUS = 6
MARKER_STROKE_COLOR = "#ffffff"
MARKER_STROKE_WEIGHT = 1
MARKER_OPACITY = 1
MARKER_FILL_OPACITY = 0.8

# ============================================================
# MENSAJES DEL PANEL
# ============================================================
PANEL_DEFAULT_NAME = "Select a station"
PANEL_DEFAULT_CONTENT = "Click a station on the map to load its recent climate data."
MSG_LOADING = "Loading climate data…"
MSG_NO_IDENTIFIER = "No climate identifier available for this station."
MSG_NO_DATA = "No data available for {year}."
MSG_FETCH_ERROR = "Error loading climate data."
MSG_LOAD_ERROR = "Could not load weather stations. The map is shown without station data."
