"""
Centralized constants for the Math Question Bank.
All magic numbers and marker tables live here.
"""

# ===========================================
# TIME
# ===========================================
CST_OFFSET_HOURS = 8                  # question ids and timestamps use China Standard Time
TIMESTAMP_FORMAT = '%Y-%m-%d %H:%M:%S'
DATE_CODE_FORMAT = '%Y%m%d'
QUESTION_SEQ_WIDTH = 4                # 202501010001

# ===========================================
# QUESTIONS / PAPERS
# ===========================================
DEFAULT_TEACHER = '独立老师'
PAPER_TITLE_TEMPLATE = '{teacher}{date}数学试卷 #{serial}'
AUTO_PAPER_DEFAULT_COUNT = 10
AUTO_PAPER_MAX_COUNT = 100

# ===========================================
# MATH RENDERING
# ===========================================
MATH_ERROR_COLOR = '#cc0000'
MATH_MACROS = {
    '\\RR': '\\mathbb{R}',
    '\\NN': '\\mathbb{N}',
    '\\ZZ': '\\mathbb{Z}',
    '\\QQ': '\\mathbb{Q}',
    '\\CC': '\\mathbb{C}',
}

# ===========================================
# SEGMENTATION
# ===========================================
ANSWER_KEYWORDS = ('答案', '答：', '答:', '解：', '解:')
ANALYSIS_KEYWORDS = ('解析', '分析', '说明', '过程', '步骤')
CIRCLED_NUMBERS = '①②③④⑤⑥⑦⑧⑨⑩'
TAG_MARKER = '【知识点】'

# ===========================================
# OCR
# ===========================================
OCR_TIMEOUT_SECONDS = 30              # per provider request
OCR_MAX_RETRIES = 3                   # connection retries per provider

# ===========================================
# API / SERVER
# ===========================================
API_RATE_LIMIT = '60/minute'
MAX_IMAGE_SIZE_MB = 10
REDACTED_FIELDS = ('api_key', 'secret_key', 'app_id', 'apiKey', 'secretKey', 'appId')
IMAGE_FIELDS = ('image_base64', 'imageBase64')

# ===========================================
# LOGGING
# ===========================================
LOG_LEVEL = 'INFO'
LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
LOG_FILE_NAME = 'question_bank.log'  # inside settings.logs_dir
LOG_MAX_SIZE_MB = 20
LOG_BACKUP_COUNT = 14
