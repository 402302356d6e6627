from pydantic_settings import BaseSettings, SettingsConfigDict
from typing import List
import os

# Load .env file if it exists, for local development
# In production, environment variables should be set directly.
if os.path.exists(".env"):
    from dotenv import load_dotenv
    load_dotenv()


class QuizSettings(BaseSettings):
    database_url: str = "sqlite:///./quiz.db"
    sql_echo: bool = False
    question_bank_path: str = "assets/round1_questions.yml"
    log_level: str = "INFO"
    cors_origins: List[str] = ["*"]
    estimated_minutes: int = 5
    max_sessions: int = 1000
    session_idle_ttl_seconds: float = 3600.0

    model_config = SettingsConfigDict(env_prefix='QUIZ_')


# Instantiate settings
settings = QuizSettings()
