"""Hello World — the simplest switchyard app.

Demonstrates a route, a path parameter, a JSON response, and a custom
status with a header.

Run:
    python app.py
"""

from switchyard import App

app = App()


@app.get("/")
def index(request, response):
    response.end("Hello, World!")


@app.get("/greet/:name")
def greet(request, response):
    response.end(f"Hello, {request.params['name']}!")


@app.get("/api/status")
def status(request, response):
    response.json({"status": "ok", "version": "0.1.0"})


@app.post("/custom")
def custom(request, response):
    response.status = 201
    response.set_header("X-Custom", "switchyard")
    response.end("Created")


if __name__ == "__main__":
    app.run()
