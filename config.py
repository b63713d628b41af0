import json
import os

DEFAULTS = {
    'DB_FILE': 'stockmanager.db',
    'LOW_STOCK_THRESHOLD': 10,
    'APPEARANCE_MODE': 'dark',
    'COLOR_THEME': 'green',
    'LOG_LEVEL': 'INFO',
    'CURRENCY_SYMBOL': '$',
}


def load_config(config_file='config.json'):
    """
    Load settings from config_file. A missing file means defaults only.
    """
    config = {}
    if os.path.exists(config_file):
        try:
            with open(config_file, 'r', encoding='utf-8') as f:
                config = json.load(f)
        except json.JSONDecodeError as e:
            with open(config_file, 'r', encoding='utf-8') as f:
                lines = f.readlines()
                error_line = lines[e.lineno - 1] if e.lineno <= len(lines) else "Unknown"
            raise ValueError(f"Config file {config_file} is invalid: {str(e)}\nLine {e.lineno}: {error_line.strip()}")
        if not isinstance(config, dict):
            raise ValueError(f"Config file {config_file} must contain a JSON object")

    for key, value in DEFAULTS.items():
        config.setdefault(key, value)
    config['LOW_STOCK_THRESHOLD'] = int(config['LOW_STOCK_THRESHOLD'])
    return config
