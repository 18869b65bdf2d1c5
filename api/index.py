# api/index.py
import logging

from mangum import Mangum

from api.config import load_settings
from api.gemini import MODEL_NAME
from api.server import create_app

# Configure logging
logging.basicConfig(level=logging.INFO,
                    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s')
logger = logging.getLogger(__name__)

# Cold start: the key is read once here and handed to the app.
# A missing GEMINI_API_KEY fails the deployment, not a request.
settings = load_settings()
app = create_app(settings)
logger.info("Handover summary proxy ready (model: %s)", MODEL_NAME)

# The 'handler' is what the serverless runtime talks to.
# Mangum translates between the platform's events and our FastAPI app.
handler = Mangum(app)
