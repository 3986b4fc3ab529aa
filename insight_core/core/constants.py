"""Constantes partagées pour éviter les valeurs magiques dans le code.

Ce module regroupe les codes HTTP utilisés par les clients distants, les bornes des contenus
générés et les valeurs par défaut appliquées lors de la normalisation.
"""

# Codes de statut HTTP utilisés par les clients distants
HTTP_NOT_FOUND = 404
HTTP_TOO_MANY_REQUESTS = 429

# Préfixe des clés de cache (namespace effacé au logout)
DEFAULT_CACHE_KEY_PREFIX = "astro_v1_"

# Bornes des contenus générés
SCORE_MIN = 0
SCORE_MAX = 100
LUCKY_NUMBER_MIN = 1
LUCKY_NUMBER_MAX = 99
LUCKY_NUMBER_COUNT = 3
MONTH_MIN = 1
MONTH_MAX = 12

# Budgets de génération (tokens)
DEFAULT_MAX_TOKENS = 2048
MONTHLY_MAX_TOKENS = 8000

# Valeurs neutres du calendrier mensuel
DEFAULT_DAY_TYPE = "reflection"
DEFAULT_STONE = "Clear Quartz"
DEFAULT_DRINK = "Warm water with lemon"
DEFAULT_WEAR_COLOR = "White"
DEFAULT_WEEKEND_TIP = "Rest and recharge"
DEFAULT_MONTH_THEME = "A month of growth and discovery"

# Couleur d'affichage par défaut (nom puis valeur hexadécimale)
DEFAULT_DISPLAY_COLOR = "Purple"
DEFAULT_COLOR_HEX = "#8a2be2"
