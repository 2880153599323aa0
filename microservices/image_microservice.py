import base64
import random
import time
from io import BytesIO
import boto3
from fastapi import HTTPException
from config import AWS_ACCESS_KEY, AWS_REGION, AWS_S3_BUCKET_NAME, AWS_SECRET_ACCESS_KEY


VALID_IMAGE_TYPES = ("image/jpeg", "image/png", "image/webp")
MAX_IMAGE_MB = 5


def generate_key():
    return str(int(time.time() * 1000)) + "_" + str(random.randint(100000000, 999999999))


def validate_image(content_type: str, size: int):
    if content_type not in VALID_IMAGE_TYPES:
        raise HTTPException(
            status_code=400, detail="Invalid image type. Please upload JPEG, PNG, or WebP.")
    if size > MAX_IMAGE_MB * 1024 * 1024:
        raise HTTPException(
            status_code=400, detail=f"Image too large. Maximum size is {MAX_IMAGE_MB}MB.")
    return True


def to_data_url(content: bytes, content_type: str) -> str:
    return f"data:{content_type};base64,{base64.b64encode(content).decode('ascii')}"


def s3_client():
    return boto3.client(
        "s3",
        aws_access_key_id=AWS_ACCESS_KEY,
        aws_secret_access_key=AWS_SECRET_ACCESS_KEY,
        region_name=AWS_REGION,
    )


def upload_to_s3(content: bytes, content_type: str) -> str:
    key = generate_key()
    s3_client().upload_fileobj(BytesIO(content), AWS_S3_BUCKET_NAME, key,
                               ExtraArgs={"ContentType": content_type})
    return f"https://{AWS_S3_BUCKET_NAME}.s3.amazonaws.com/{key}"


def encode_image(content: bytes, content_type: str) -> str:
    # bucket configured -> link, otherwise inline data url
    validate_image(content_type, len(content))
    if AWS_S3_BUCKET_NAME:
        return upload_to_s3(content, content_type)
    return to_data_url(content, content_type)
