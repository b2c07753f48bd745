import os

# Survey definition holding the question -> axis table and labels
SURVEY_DEFINITION_PATH = os.getenv("BELIEF_SURVEY_DEFINITION", "assets/survey_definition.yml")

# Candidate pools at least this large are scored on a thread pool
MATCH_PARALLEL_THRESHOLD = int(os.getenv("BELIEF_MATCH_PARALLEL_THRESHOLD", "500"))
MATCH_MAX_WORKERS = int(os.getenv("BELIEF_MATCH_MAX_WORKERS", "8"))

LOG_LEVEL = os.getenv("BELIEF_LOG_LEVEL", "INFO").upper()
