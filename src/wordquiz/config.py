import os


class Settings:
    PROJECT_NAME: str = "wordquiz"
    DEBUG: bool = os.environ.get("DEBUG", "").lower() in ("1", "true", "yes")
    LOG_DIR: str = os.environ.get("LOG_DIR", "log")
    LOG_FILE: str = "wordquiz.log"
    DB_DIR: str = os.environ.get("DB_DIR", "db")
    DB_FILE: str = "wordquiz.db"
    ROOT_PATH: str = os.environ.get("ROOT_PATH", "")

    # Published spreadsheet export (URL) or a local CSV path
    CSV_SOURCE: str = os.environ.get(
        "CSV_SOURCE",
        "https://docs.google.com/spreadsheets/d/1eb5Qks5GwyyMM8UFOeKkPZ6U42UU6LoWN6jcNVGZzuk/export?format=csv&gid=0",
    )
    FORWARD_COLUMN: str = "en"
    REVERSE_COLUMN: str = "ja"
    CATEGORY_COLUMN: str = "year"
    ALT_COLUMN: str = "alt"
    INPUT_COLUMN: str = "input"

    STATS_KEY: str = "wordStats"
    TEST_SIZE: int = 15
    NUM_DISTRACTORS: int = 3

    # Priority scoring
    UNSEEN_PRIORITY: float = float(os.environ.get("UNSEEN_PRIORITY", 1000))
    ACCURACY_WEIGHT: float = float(os.environ.get("ACCURACY_WEIGHT", 10))
    RECENCY_CAP_DAYS: float = float(os.environ.get("RECENCY_CAP_DAYS", 10))
    CANDIDATE_WINDOW_FACTOR: int = int(os.environ.get("CANDIDATE_WINDOW_FACTOR", 2))


settings = Settings()
