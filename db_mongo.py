from motor.motor_asyncio import AsyncIOMotorClient
import os
from dotenv import load_dotenv

load_dotenv()

# MongoDB connection string
MONGO_DETAILS = os.getenv("MONGO_URI", "mongodb://localhost:27017/")
DATABASE_NAME = os.getenv("MONGO_DATABASE", "pathfinder")

# Create async client (connects lazily on first operation)
client = AsyncIOMotorClient(MONGO_DETAILS, tz_aware=True)
db = client[DATABASE_NAME]

# Collections
preferences_collection = db["preferences"]
