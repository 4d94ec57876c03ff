"""
SpeakCoach configuration module
Loads every setting from the .env file and exposes a global ``settings`` singleton
"""
import os
from pathlib import Path
from dataclasses import dataclass, field
from dotenv import load_dotenv

load_dotenv()

BASE_DIR = Path(__file__).resolve().parent.parent


def _env_float(name: str, default: str) -> float:
    return float(os.getenv(name, default))


@dataclass
class Settings:
    """Global configuration"""

    # Service
    host: str = field(default_factory=lambda: os.getenv("HOST", "0.0.0.0"))
    port: int = field(default_factory=lambda: int(os.getenv("PORT", "8900")))

    # Transcriber type: sample / groq
    transcriber_type: str = field(default_factory=lambda: os.getenv("TRANSCRIBER_TYPE", "sample"))

    # Groq Whisper (cloud transcription)
    groq_api_key: str = field(default_factory=lambda: os.getenv("GROQ_API_KEY", ""))

    # Debate opponent type: canned / llm
    opponent_type: str = field(default_factory=lambda: os.getenv("OPPONENT_TYPE", "canned"))

    # LLM opponent (any OpenAI-compatible API)
    llm_api_key: str = field(default_factory=lambda: os.getenv("LLM_API_KEY", ""))
    llm_base_url: str = field(default_factory=lambda: os.getenv("LLM_BASE_URL", "https://api.openai.com/v1"))
    llm_model: str = field(default_factory=lambda: os.getenv("LLM_MODEL", "gpt-4o-mini"))

    # Simulated latencies (seconds), 0 disables them
    analysis_delay: float = field(default_factory=lambda: _env_float("ANALYSIS_DELAY", "3.0"))
    transcription_delay: float = field(default_factory=lambda: _env_float("TRANSCRIPTION_DELAY", "2.0"))

    # Debate
    debate_time_limit: float = field(default_factory=lambda: _env_float("DEBATE_TIME_LIMIT", "300"))
    debate_reply_delay: float = field(default_factory=lambda: _env_float("DEBATE_REPLY_DELAY", "2.0"))

    # Rough duration estimate for uploads without an explicit duration
    audio_byte_rate: int = field(default_factory=lambda: int(os.getenv("AUDIO_BYTE_RATE", "16000")))

    # Storage
    data_dir: Path = field(default_factory=lambda: BASE_DIR / os.getenv("DATA_DIR", "data"))

    def __post_init__(self):
        self.data_dir = Path(self.data_dir)
        self.data_dir.mkdir(parents=True, exist_ok=True)


def load_settings() -> Settings:
    """Rebuild the global settings from the current environment"""
    global settings
    settings = Settings()
    return settings


settings = Settings()
