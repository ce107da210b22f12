"""
Configuration constants for the prerequisite graph pipeline.
"""

from pathlib import Path

# =============================================================================
# COURSE IDS
# =============================================================================

# Catalog numbers are three digits: 100 <= class_id < 1000
MIN_CLASS_ID = 100
MAX_CLASS_ID = 1000


# =============================================================================
# SCHEDULING
# =============================================================================

# Nobody takes more than ten courses in one term
MAX_SET_CAPACITY = 10

# Courses per term used when planning
DEFAULT_TERM_CAPACITY = 5


# =============================================================================
# FILE PATHS
# =============================================================================

DATA_DIR = Path("data")
COURSES_PATH = DATA_DIR / "courses.json"
PARSED_PATH = DATA_DIR / "courses_parsed.json"
UNPARSED_PATH = DATA_DIR / "courses_unparsed.json"
CATALOG_PATH = DATA_DIR / "catalog.json"
GRAPH_PATH = DATA_DIR / "graph.json"
