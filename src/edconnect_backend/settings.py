import os
import threading

_DEFAULT_SEED_FILE = os.path.join(os.path.dirname(__file__), "data", "seed.yaml")

class BackendSettings:
    _instance = None
    _lock = threading.Lock()

    def __init__(self):
        self.DEBUG_MODE = os.environ.get("DEBUG_MODE","development")
        self.DATABASE_URL = os.environ.get("DATABASE_URL","sqlite:///./edconnect.db")
        # Single school deployment; announcements are stamped with this id
        self.SCHOOL_ID = os.environ.get("SCHOOL_ID","TH01")
        self.LOG_LEVEL = os.environ.get("LOG_LEVEL","INFO").upper()
        self.SEED_FILE = os.environ.get("SEED_FILE",_DEFAULT_SEED_FILE)

    def __new__(cls):
        if cls._instance is None:
            with cls._lock:
                if cls._instance is None:
                    cls._instance = super(BackendSettings, cls).__new__(cls)
        return cls._instance

settings = BackendSettings()
