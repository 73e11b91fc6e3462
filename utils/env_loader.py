from pathlib import Path
from typing import Dict


def load_environments(env_path: str = ".env") -> Dict[str, str]:
    env_file = Path(env_path)
    if not env_file.exists():
        raise FileNotFoundError(f"Env file not found: {env_file}")

    values: Dict[str, str] = {}
    for raw_line in env_file.read_text(encoding="utf-8").splitlines():
        line = raw_line.strip()
        if not line or line.startswith("#") or "=" not in line:
            continue
        key, value = line.split("=", 1)
        key = key.strip()
        if key.startswith("export "):
            key = key[len("export "):].strip()
        value = value.strip().strip("'").strip('"')
        if key:
            values[key] = value
    return values
