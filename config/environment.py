import os
from dotenv import load_dotenv

load_dotenv()

db_URI = os.getenv('DATABASE_URL')
frontend_url = os.getenv('FRONTENDURL')
log_level = os.getenv('LOG_LEVEL', 'INFO').upper()

# Cloudinary credentials
cloudinary_cloud_name = os.getenv('CLOUDINARY_CLOUD_NAME')
cloudinary_api_key = os.getenv('CLOUDINARY_API_KEY')
cloudinary_api_secret = os.getenv('CLOUDINARY_API_SECRET')
cloudinary_folder = os.getenv('CLOUDINARY_FOLDER', 'shop/products')

# Uploaded images are served from the CDN, not from the storage host
storage_base_url = os.getenv('STORAGE_BASE_URL')
cdn_base_url = os.getenv('CDN_BASE_URL')
