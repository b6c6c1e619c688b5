"""Application configuration and fixed study constants."""
import os
from pathlib import Path

from dotenv import load_dotenv

load_dotenv()

APP_DIR = Path.home() / ".sat_ascent"

DEFAULT_DB_PATH = os.environ.get("SAT_ASCENT_DB", str(APP_DIR / "ascent.db"))
LOG_FILE = os.environ.get("SAT_ASCENT_LOG", str(APP_DIR / "ascent.log"))

# Gemini
GEMINI_API_KEY = os.environ.get("GEMINI_API_KEY") or os.environ.get("API_KEY")
GEMINI_MODEL = os.environ.get("GEMINI_MODEL", "gemini-2.5-flash")

DAILY_GOAL = int(os.environ.get("SAT_ASCENT_DAILY_GOAL", "10"))

SUBJECTS = ("Math", "Reading", "Writing")
DIFFICULTIES = ("Easy", "Medium", "Hard")
OPTION_KEYS = ("A", "B", "C", "D")

# Adaptive difficulty
NEUTRAL_ACCURACY = 0.5
HARD_THRESHOLD = 0.75
EASY_THRESHOLD = 0.40

# Challenge mode
CHALLENGE_SUBJECTS = ("Math", "Math", "Reading", "Writing", "Writing")
CHALLENGE_DIFFICULTY = "Medium"
SECONDS_PER_QUESTION = 90

TOPICS = {
    "Math": [
        "Heart of Algebra",
        "Problem Solving and Data Analysis",
        "Passport to Advanced Math",
        "Geometry and Trigonometry",
    ],
    "Reading": [
        "Information and Ideas",
        "Rhetoric",
        "Synthesis",
        "Vocabulary in Context",
    ],
    "Writing": [
        "Expression of Ideas",
        "Standard English Conventions",
        "Punctuation",
        "Sentence Structure",
    ],
}
