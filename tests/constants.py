from pathlib import Path

DATA_DIR = Path(__file__).parent/'data'
BASE_URL = 'https://console.test/'
