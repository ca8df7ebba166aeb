from pathlib import Path


# Base directory
BASE_DIR = Path(__file__).resolve().parent.parent.parent.parent

# Log directory
LOG_DIR = BASE_DIR / 'logs'

# Persisted session (token + user profile) directory
SESSION_STATE_DIR = BASE_DIR / 'session_state'
