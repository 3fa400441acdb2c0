"""Blog API — nested path parameters and registration-order middleware.

``log_request`` is registered after the two post routes, so it only runs
for ``/`` and ``/hello``. ``audit`` and ``stamp`` come later still and
only reach ``/hello``.

Run:
    PORT=3000 python app.py
"""

import logging

from switchyard import App, AppConfig

logger = logging.getLogger("blog")

app = App(AppConfig.from_env())

# Filled in by the middleware so tests can see which chains ran them
seen: list[str] = []


@app.get("/posts/:id/comments/:commentId/replies")
def replies(request, response):
    post_id = request.params["id"]
    comment_id = request.params["commentId"]
    logger.info("Fetching replies for comment %s on post %s", comment_id, post_id)
    response.json({"postId": post_id, "commentId": comment_id, "replies": []})


@app.get("/posts/:id")
def show_post(request, response):
    post_id = request.params["id"]
    logger.info("Fetching post with ID: %s", post_id)
    response.json({"postId": post_id, "title": "Sample Post"})


def log_request(request, response):
    seen.append(f"log {request.method} {request.url}")


app.use(log_request)


def echo_headers(request, response):
    response.json(dict(request.headers))


def after_echo(request, response):
    # Never runs: echo_headers ends the response first.
    seen.append("after echo")


app.get("/", echo_headers, after_echo)


def audit(request, response):
    seen.append("audit")


def stamp(request, response):
    response.set_header("X-Stamped", "1")


app.use(audit, stamp)


@app.get("/hello")
def hello(request, response):
    response.json({"message": "Hello, World!"})


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)
    app.listen(on_ready=lambda: logger.info("Server is running on port %d", app.config.port))
