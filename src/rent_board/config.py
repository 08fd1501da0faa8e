from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional


DEFAULT_API_URL = os.environ.get("RENT_BOARD_API_URL", "http://localhost:8080/api.php")
DEFAULT_STORAGE_KEY = "psub_homeprice_data_v1"


@dataclass
class BoardConfig:
    api_url: str = DEFAULT_API_URL
    data_dir: Path = Path(os.environ.get("RENT_BOARD_DATA_DIR", "data"))
    storage_key: str = os.environ.get("RENT_BOARD_STORAGE_KEY", DEFAULT_STORAGE_KEY)
    timeout_secs: float = float(os.environ.get("RENT_BOARD_TIMEOUT_SECS", "10"))
    user_agent: str = os.environ.get("HTTP_USER_AGENT", "RentBoard/1.0")
    # unset disables admin deletes
    admin_passphrase: Optional[str] = os.environ.get("RENT_BOARD_ADMIN_PASSPHRASE")
    max_image_width: int = int(os.environ.get("RENT_BOARD_MAX_IMAGE_WIDTH", "1000"))
    jpeg_quality: int = int(os.environ.get("RENT_BOARD_JPEG_QUALITY", "80"))
    log_level: str = os.environ.get("RENT_BOARD_LOG_LEVEL", "INFO")
