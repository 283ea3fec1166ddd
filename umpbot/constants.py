DEFAULT_GEMINI_MODEL = "gemini-2.5-flash"
DEFAULT_GEMINI_API_BASE_URL = "https://generativelanguage.googleapis.com/v1beta"
DEFAULT_GEMINI_TIMEOUT_SECONDS = 60
# Upper bound on the default number of PDF text workers per request
WORKER_FETCH_CAP = 20
# Namespace prefix for extracted PDF text in the shared cache
PDF_CACHE_NAMESPACE = "umpbot:pdf"
CACHE_PROBE_KEY = "umpbot:probe"
PDF_EXTENSION = ".pdf"
KNOWLEDGE_EXTENSION = ".txt"
# Root documents appended to every selection when present on disk
ALWAYS_INCLUDED_DOCUMENTS = (
    "Weather-Policy-rev-Feb-2023.pdf",
    "TieBreakerS2013.pdf",
)
ALL_LEAGUE_RULES_MARKER = "ALL-LEAGUE-RULES"
# Labels used when synthesizing a task string, in output order
TASK_LABELS = (
    ("season", "Season"),
    ("sport", "Sport"),
    ("age_range", "Age Range"),
    ("teeball_level", "Tee Ball Level"),
    ("question", "Question"),
)
SPORTS = (
    ("tee", "Teeball"),
    ("soft", "Softball"),
    ("base", "Baseball"),
)
