from fastapi import APIRouter, Depends, HTTPException, Response

from shopadmin.api.deps import content_store
from shopadmin.db.content_store import ContentStore

router = APIRouter(tags=["assets"])


# no session required: storefront pages embed these URLs
@router.get("/assets/{asset_id}")
async def get_asset(asset_id: str, store: ContentStore = Depends(content_store)):
    found = await store.open_asset(asset_id)
    if found is None:
        raise HTTPException(status_code=404, detail="Asset not found")
    data, content_type = found
    return Response(content=data, media_type=content_type, headers={"Cache-Control": "public, max-age=86400"})
