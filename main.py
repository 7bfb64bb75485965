import os

import uvicorn
from dotenv import load_dotenv

load_dotenv()

from simulark.api.server import app

if __name__ == "__main__":
    uvicorn.run(app, host="0.0.0.0", port=int(os.getenv("PORT", 8001)))
