"""
SpeakCoach: public speaking and debate practice backend

Start with:
    python main.py
    or
    uvicorn main:app --host 0.0.0.0 --port 8900 --reload
"""
import logging

import uvicorn

from speakcoach import create_app
from speakcoach.config import settings

# Logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s │ %(levelname)-7s │ %(name)s │ %(message)s",
    datefmt="%H:%M:%S",
)

logger = logging.getLogger("speakcoach")

app = create_app()

if __name__ == "__main__":
    logger.info(f"🚀 SpeakCoach starting at http://{settings.host}:{settings.port}")
    logger.info(f"📖 API docs: http://127.0.0.1:{settings.port}/docs")
    logger.info(f"🎙️ Transcriber: {settings.transcriber_type}")
    logger.info(f"🤖 Debate opponent: {settings.opponent_type}")

    uvicorn.run(
        app,
        host=settings.host,
        port=settings.port,
        reload=False,
    )
