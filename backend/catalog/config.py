from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

load_dotenv(Path(__file__).resolve().parent.parent.parent / ".env")

DEFAULT_CATALOG_CSV = Path(__file__).resolve().parent.parent / "data" / "movies.csv"


@dataclass(frozen=True)
class StoreConfig:
    """
    Where the catalog and ratings live.

    ``backend`` is ``"supabase"`` for the hosted database or ``"local"`` for
    the bundled CSV catalog with in-memory ratings.
    """

    backend: str = "supabase"
    supabase_url: str = ""
    supabase_key: str = ""
    catalog_csv: Path = DEFAULT_CATALOG_CSV

    @classmethod
    def from_env(cls) -> StoreConfig:
        return cls(
            backend=os.getenv("CATALOG_BACKEND", cls.backend).lower(),
            supabase_url=os.getenv("SUPABASE_URL", ""),
            supabase_key=os.getenv("SUPABASE_SERVICE_ROLE_KEY", ""),
            catalog_csv=Path(os.getenv("CATALOG_CSV", str(DEFAULT_CATALOG_CSV))),
        )
