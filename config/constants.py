"""
Centralized constants for Auto-MQM.
Fixed values shared by the segmentation, scoring and analysis modules.
"""

# ===========================================
# MQM SCORING
# ===========================================
SEVERITY_POINTS = {
    'MINOR': 1,
    'MAJOR': 5,
    'CRITICAL': 10,
}
MQM_CATEGORIES = (
    'Accuracy',
    'Fluency',
    'Terminology',
    'Style',
    'Design',
)
MONOLINGUAL_EXCLUDED_CATEGORIES = ('Accuracy',)
EMPTY_DOCUMENT_SCORE = 100.0          # no content => no penalty
MAX_SCORE = 100.0
MIN_SCORE = 0.0

# ===========================================
# ANALYSIS
# ===========================================
ANALYSIS_MODES = ('monolingual', 'bilingual')
DEFAULT_MODE = 'bilingual'
DEFAULT_MODEL = 'claude-sonnet-4-20250514'
EVALUATION_BATCH_SIZE = 5             # concurrent model calls per batch
EVALUATION_TIMEOUT_SECONDS = 120.0    # per model call
WORD_COUNT_LIMIT = 500                # 0 disables the check
EVALUATION_MAX_TOKENS = 4000
EVALUATION_TEMPERATURE = 0.0
EVALUATION_MAX_RETRIES = 2            # SDK retries per model call

# ===========================================
# CACHE
# ===========================================
CACHE_MAX_ENTRIES = 1000
CACHE_DIR = 'data/cache/analysis'

# ===========================================
# FILE HANDLING
# ===========================================
FILE_TYPE_ALIASES = {
    'tmx': 'tmx',
    'xliff': 'xliff',
    'xlf': 'xliff',
}
XML_LANG_ATTR = '{http://www.w3.org/XML/1998/namespace}lang'

# ===========================================
# LOGGING
# ===========================================
LOG_LEVEL = 'INFO'
LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
LOG_MAX_SIZE_MB = 10
LOG_BACKUP_COUNT = 5
