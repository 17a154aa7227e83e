import uvicorn

from shopledger.core.config import settings
from shopledger.main import app

if __name__ == "__main__":
    uvicorn.run(app, host=settings.HOST, port=settings.PORT)
