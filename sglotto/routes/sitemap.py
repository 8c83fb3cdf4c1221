from __future__ import annotations

from flask import Blueprint, Response, current_app, jsonify

from ..services.results import ResultRepository
from ..services.sitemap import build_sitemap, render_sitemap_xml

bp = Blueprint("sitemap", __name__)
result_repo = ResultRepository()


@bp.get("/sitemap.xml")
def sitemap_xml():
    entries = build_sitemap(current_app.config["SITE_URL"], repo=result_repo)
    return Response(render_sitemap_xml(entries), mimetype="application/xml")


@bp.get("/sitemap.json")
def sitemap_json():
    return jsonify(build_sitemap(current_app.config["SITE_URL"], repo=result_repo))
