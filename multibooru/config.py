import json
import os
from pathlib import Path
from typing import Optional, Tuple

from dotenv import load_dotenv

load_dotenv()


class Settings:
    def __init__(self):
        self.BASE_DIR = Path(__file__).resolve().parent.parent
        self.SETTINGS_FILE = Path(os.getenv("MULTIBOORU_SETTINGS_FILE", self.BASE_DIR / "settings.json"))

        self.settings = self.load_settings()

    def load_settings(self) -> dict:
        settings = {
            "user_agent": "Mozilla/5.0 MultiBooru/1.0",
            "timeout": 30.0,
            "credentials": {},
        }
        if self.SETTINGS_FILE.exists():
            with open(self.SETTINGS_FILE, 'r') as f:
                settings.update(json.load(f))

        if os.getenv("MULTIBOORU_USER_AGENT"):
            settings["user_agent"] = os.getenv("MULTIBOORU_USER_AGENT")
        if os.getenv("MULTIBOORU_TIMEOUT"):
            settings["timeout"] = float(os.getenv("MULTIBOORU_TIMEOUT"))
        return settings

    @property
    def USER_AGENT(self) -> str:
        return self.settings["user_agent"]

    @property
    def TIMEOUT(self) -> float:
        return float(self.settings["timeout"])

    def get_credentials(self, site: str) -> Optional[Tuple[str, str]]:
        """
        Credentials for ``site`` as ``(user_id, api_key)``.

        Environment variables ``MULTIBOORU_<SITE>_USER_ID`` and
        ``MULTIBOORU_<SITE>_API_KEY`` win over the settings file.
        """
        prefix = f"MULTIBOORU_{site.upper()}"
        user_id = os.getenv(f"{prefix}_USER_ID")
        api_key = os.getenv(f"{prefix}_API_KEY")
        if user_id and api_key:
            return user_id, api_key

        stored = self.settings.get("credentials", {}).get(site)
        if stored and stored.get("user_id") and stored.get("api_key"):
            return stored["user_id"], stored["api_key"]
        return None

settings = Settings()
