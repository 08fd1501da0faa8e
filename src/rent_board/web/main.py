from __future__ import annotations

from typing import List, Optional

from fastapi import Depends, FastAPI, File, Form, Header, HTTPException, Query, Response, UploadFile
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from rent_board.config import BoardConfig
from rent_board.exceptions import AdminAuthError, ImageError, ListingValidationError, LocalStoreError
from rent_board.services import BoardService, ListingDraft, build_board
from rent_board.services.board import MAX_IMAGES
from rent_board.utils import configure_logging, jsonify_listings


class AdminLogin(BaseModel):
    passphrase: str


def create_app(board: Optional[BoardService] = None) -> FastAPI:
    if board is None:
        config = BoardConfig()
        configure_logging(config.log_level)
        board = build_board(config)

    app = FastAPI(title="Rent Board")
    app.state.board = board

    def get_board() -> BoardService:
        return app.state.board

    @app.get("/healthz")
    def healthz(svc: BoardService = Depends(get_board)) -> dict:
        return {"remote": svc.repository.remote_reachable()}

    @app.get("/api/listings")
    async def list_listings(
        q: Optional[str] = Query(None, description="Matches location or details"),
        svc: BoardService = Depends(get_board),
    ) -> JSONResponse:
        return JSONResponse(jsonify_listings(await svc.browse(q or "")))

    @app.post("/api/listings")
    async def create_listing(
        contact_name: str = Form(""),
        contact_phone: str = Form(""),
        location: str = Form(""),
        price: str = Form(""),
        details: str = Form(""),
        photos: Optional[List[UploadFile]] = File(None),
        svc: BoardService = Depends(get_board),
    ) -> JSONResponse:
        draft = ListingDraft(
            contact_name=contact_name,
            contact_phone=contact_phone,
            location=location,
            price=price,
            details=details,
        )
        raw = [await p.read() for p in (photos or [])[:MAX_IMAGES]]
        try:
            listings = await svc.submit(draft, raw)
        except ListingValidationError as e:
            raise HTTPException(status_code=400, detail=str(e))
        except ImageError as e:
            raise HTTPException(status_code=422, detail=f"Could not process photo: {e}")
        except LocalStoreError as e:
            raise HTTPException(status_code=503, detail=str(e))
        return JSONResponse(jsonify_listings(listings), status_code=201)

    @app.post("/api/admin/login")
    def admin_login(body: AdminLogin, svc: BoardService = Depends(get_board)) -> Response:
        if not svc.check_admin(body.passphrase):
            raise HTTPException(status_code=401, detail="Invalid passphrase")
        return Response(status_code=204)

    @app.delete("/api/listings/{listing_id}")
    async def delete_listing(
        listing_id: str,
        x_admin_passphrase: Optional[str] = Header(None),
        svc: BoardService = Depends(get_board),
    ) -> JSONResponse:
        try:
            listings = await svc.remove(listing_id, x_admin_passphrase)
        except AdminAuthError as e:
            raise HTTPException(status_code=403, detail=str(e))
        return JSONResponse(jsonify_listings(listings))

    return app
