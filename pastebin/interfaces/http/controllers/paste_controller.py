# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from datetime import timedelta

from flask import Blueprint, Response, jsonify, request
from pydantic import ValidationError

from pastebin.application.services.paste_service import PasteService
from pastebin.domain.pastes.entities import NewPaste
from pastebin.domain.pastes.exceptions import PasteNotFoundError
from pastebin.interfaces.http.dto.pastes import CreatePasteRequestDTO, PasteDTO
from pastebin.shared.errors.validation import raise_validation_error
from pastebin.shared.utils import base62

PASSWORD_HEADER = "X-Paste-Password"


def _paste_id(short_id: str) -> int:
    paste_id = base62.decode(short_id)
    if paste_id is None:
        raise PasteNotFoundError()
    return paste_id


class PasteController:
    def __init__(self, *, paste_service: PasteService) -> None:
        self._pastes = paste_service

    def create(self) -> tuple[Response, int]:
        try:
            dto = CreatePasteRequestDTO.model_validate(request.get_json(silent=True) or {})
        except ValidationError as exc:
            raise_validation_error(exc)

        ttl = timedelta(seconds=dto.ttl_seconds) if dto.ttl_seconds is not None else None
        paste = self._pastes.create(
            NewPaste(
                title=dto.title,
                body=dto.body,
                syntax=dto.syntax,
                password=dto.password,
                delete_after_read=dto.delete_after_read,
                ttl=ttl,
            )
        )
        return jsonify(PasteDTO.from_entity(paste).model_dump(mode="json")), 201

    def show(self, short_id: str) -> tuple[Response, int]:
        password = request.headers.get(PASSWORD_HEADER) or None
        paste = self._pastes.paste(_paste_id(short_id), password)
        return jsonify(PasteDTO.from_entity(paste).model_dump(mode="json")), 200

    def delete(self, short_id: str) -> tuple[str, int]:
        paste_id = base62.decode(short_id)
        if paste_id is not None:
            self._pastes.delete(paste_id)
        return "", 204

    def as_blueprint(self) -> Blueprint:
        bp = Blueprint("pastes", __name__, url_prefix="/api/pastes")
        bp.add_url_rule("", view_func=self.create, methods=["POST"])
        bp.add_url_rule("/<short_id>", view_func=self.show, methods=["GET"])
        bp.add_url_rule("/<short_id>", view_func=self.delete, methods=["DELETE"])
        return bp
