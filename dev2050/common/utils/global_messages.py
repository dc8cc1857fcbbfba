class GlobalMessages:
    # Auth Messages
    INVALID_PASSWORD = "Invalid password."
    PASSWORD_VERIFIED = "Password verified."

    # Catalog Messages
    RESOURCE_NOT_FOUND = "Resource not found."
    LEARNING_PATH_NOT_FOUND = "Learning path not found."
    LEARNING_PLAN_UNAVAILABLE = "No learning plan could be produced for this profile."
    BLOG_POST_NOT_FOUND = "Blog post not found."

    # Feature Messages
    FEATURE_DISABLED = "This feature is not enabled yet."
    JSON_GENERATION_FAILED = "Failed to generate body."

    # Image Messages
    IMAGE_NOT_FOUND = "Image not found."
    IMAGE_DELETED = "Image deleted successfully."
    IMAGE_RENAMED = "Image renamed successfully."
    IMAGE_RENAME_PARTIAL = "Image copied to the new key but the old key could not be removed."
    IMAGE_KEY_CONFLICT = "An image with that key already exists."
    UPLOAD_FAILED = "Upload failed."
    STORAGE_UNAVAILABLE = "Storage service failed to complete the request."

    # Download Messages
    MISSING_IMAGE_URL = "Missing image URL"
    IMAGE_URL_NOT_ALLOWED = "Image URL is not allowed"
    IMAGE_FETCH_FAILED = "Failed to fetch image"
    DOWNLOAD_FAILED = "Download failed"
