#app\services\storage.py
import requests, uuid, time
from app.core.config import settings

def upload_image(data: bytes, content_type: str, path: str) -> str:
    """Uploads to Supabase Storage via REST; returns public URL (bucket must be public)."""
    if not (settings.supabase_url and settings.supabase_service_role):
        # storage not configured: keep the image inline
        import base64
        b64 = base64.b64encode(data).decode('utf-8')
        return f"data:{content_type};base64,{b64}"
    url = f"{settings.supabase_url}/storage/v1/object/{settings.supabase_bucket}/{path}"
    r = requests.post(url, headers={
        "Authorization": f"Bearer {settings.supabase_service_role}",
        "Content-Type": content_type,
        "x-upsert": "true",
    }, data=data, timeout=30)
    r.raise_for_status()
    return f"{settings.supabase_url}/storage/v1/object/public/{settings.supabase_bucket}/{path}"

def make_profile_key(account_id: int, filename: str) -> str:
    ext = (filename.rsplit(".",1)[-1] if "." in filename else "jpg").lower()
    return f"profiles/{account_id}_{int(time.time())}_{uuid.uuid4().hex[:8]}.{ext}"
