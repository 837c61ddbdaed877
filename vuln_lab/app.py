"""VulnLab — local target serving the conventional paths webprobe checks.

Two flavours:
  * weak (default): reflects input, leaks SQL errors, leaves admin pages
    open, advertises an old Apache, no hardening headers.
  * hardened: every check should come back clean (except SSL on plain HTTP).

    python -m vuln_lab.app            # weak, http://127.0.0.1:5000
    python -m vuln_lab.app --hardened
"""

import argparse
import sqlite3
import uuid

from flask import Flask, request, render_template_string, make_response, jsonify

_LAYOUT = """<!DOCTYPE html>
<html><head><title>VulnLab — {{ title }}</title>
{{ scripts|safe }}
</head>
<body>
<h1>VulnLab</h1>
<h2>{{ title }}</h2>
{{ content|safe }}
</body></html>
"""

_WEAK_SCRIPTS = '<script src="https://cdn.example.com/jquery.min.js"></script>'
_HARDENED_SCRIPTS = (
    '<script src="https://cdn.example.com/jquery.min.js" '
    'integrity="sha384-vtXRMe3mGCbOeY7l30aIg8H9p3GdeSe4IFlP6G8JMa7o7lXvnz3GFKzPxzJdPfGK" '
    'crossorigin="anonymous"></script>'
)

_HARDENING_HEADERS = {
    "Strict-Transport-Security": "max-age=63072000; includeSubDomains",
    "X-Content-Type-Options": "nosniff",
    "X-Frame-Options": "DENY",
    "Content-Security-Policy": "default-src 'self'",
    "Referrer-Policy": "strict-origin-when-cross-origin",
    "Permissions-Policy": "geolocation=()",
    "Cross-Origin-Opener-Policy": "same-origin",
    "X-RateLimit-Limit": "100",
    "Server-Timing": "tls=1.3",
}

_PROTECTED = ["/admin", "/api/users", "/dashboard", "/settings"]
_FETCHERS = ["/api/fetch", "/api/proxy", "/api/import", "/api/webhook"]


def _lookup_user(id_val: str):
    """Run the deliberately unsafe query against a throwaway SQLite db."""
    conn = sqlite3.connect(":memory:")
    try:
        conn.execute("CREATE TABLE users (id INTEGER, name TEXT)")
        conn.execute("INSERT INTO users VALUES (1, 'admin')")
        return conn.execute(f"SELECT name FROM users WHERE id = {id_val}").fetchall()
    finally:
        conn.close()


def create_app(hardened: bool = False) -> Flask:
    app = Flask(__name__)
    app.config["HARDENED"] = hardened

    def page(title, content):
        scripts = _HARDENED_SCRIPTS if hardened else _WEAK_SCRIPTS
        return render_template_string(_LAYOUT, title=title, content=content,
                                      scripts=scripts)

    @app.after_request
    def decorate(resp):
        if hardened:
            resp.headers.update(_HARDENING_HEADERS)
            resp.headers["X-Request-Id"] = uuid.uuid4().hex
        else:
            resp.headers["Server"] = "Apache/2.4.29 (Ubuntu)"
        return resp

    @app.route("/")
    def home():
        resp = make_response(page("Home", "<p>Target for webprobe.</p>"))
        if hardened:
            resp.set_cookie("session", "lab", secure=True, httponly=True,
                            samesite="Strict")
        else:
            resp.set_cookie("session", "lab")
        return resp

    # ── reflected input ─────────────────────────────────────────

    @app.route("/search")
    @app.route("/comment")
    @app.route("/feedback")
    def reflect():
        q = request.args.get("q", "")
        id_val = request.args.get("id", "")
        if id_val and request.path == "/search":
            return sql_lookup()
        if hardened:
            return page("Results", render_template_string(
                "<p>Results for: {{ q }}</p>", q=q))
        # VULNERABLE: unescaped reflection
        return page("Results", f"<p>Results for: {q}</p>")

    # ── SQL error leakage ───────────────────────────────────────

    @app.route("/profile")
    def sql_lookup():
        id_val = request.args.get("id", "1")
        try:
            rows = _lookup_user(id_val)
        except sqlite3.Error as e:
            if hardened:
                return page("Profile", "<p>Something went wrong.</p>"), 500
            # VULNERABLE: database error echoed to the client
            return page("Profile",
                        f"<p>You have an error in your SQL syntax near '{id_val}': {e}</p>"), 500
        return page("Profile", f"<p>{len(rows)} user(s)</p>")

    @app.route("/login", methods=["GET", "POST"])
    def login():
        if request.method == "GET":
            return sql_lookup()
        return jsonify(error="invalid credentials"), 401

    @app.route("/register", methods=["POST"])
    @app.route("/reset-password", methods=["POST"])
    @app.route("/api/bulk-update", methods=["POST"])
    @app.route("/upload", methods=["POST"])
    def accepted():
        return jsonify(status="accepted"), 202

    @app.route("/api/export")
    @app.route("/api/data")
    def data():
        return jsonify(rows=[])

    # ── access control ──────────────────────────────────────────

    def protected():
        if hardened:
            return jsonify(error="authentication required"), 401
        return page("Restricted", "<p>Welcome, administrator.</p>")

    for path in _PROTECTED:
        app.add_url_rule(path, "protected_" + path.strip("/").replace("/", "_"), protected)

    # ── SSRF-prone fetchers ─────────────────────────────────────

    def fetcher():
        body = request.get_json(silent=True) or {}
        url = str(body.get("url", ""))
        if hardened:
            return jsonify(error="destination not allowed"), 403
        # VULNERABLE: would fetch any URL; the lab only pretends to
        return jsonify(fetched=url, status="queued")

    for path in _FETCHERS:
        app.add_url_rule(path, "fetch_" + path.strip("/").replace("/", "_"), fetcher,
                         methods=["POST"])

    return app


if __name__ == "__main__":
    p = argparse.ArgumentParser(description="VulnLab target for webprobe")
    p.add_argument("--hardened", action="store_true")
    p.add_argument("--port", type=int, default=5000)
    args = p.parse_args()
    print(f"\n  VulnLab ({'hardened' if args.hardened else 'weak'}) "
          f"on http://127.0.0.1:{args.port}\n")
    create_app(args.hardened).run(host="127.0.0.1", port=args.port)
