"""Web UI routes for SpritePack."""

import json
import queue
import threading
import uuid
import zipfile
from pathlib import Path

from flask import (
    Blueprint,
    Response,
    current_app,
    jsonify,
    render_template,
    request,
    send_from_directory,
)

from spritepack.analyzers.catalog import ClipValidationError
from spritepack.engine import process
from spritepack.manifest import ConfigError, Manifest

bp = Blueprint("web", __name__, template_folder="templates")

# In-memory job store: job_id -> job dict
_jobs: dict[str, dict] = {}


@bp.route("/")
def index():
    return render_template("index.html")


@bp.route("/api/upload", methods=["POST"])
def upload():
    if "file" not in request.files:
        return jsonify({"error": "No file provided"}), 400

    f = request.files["file"]
    if not f.filename:
        return jsonify({"error": "Empty filename"}), 400
    if Path(f.filename).suffix.lower() != ".zip":
        return jsonify({"error": "Upload a .zip of .wav clips"}), 400

    job_id = uuid.uuid4().hex[:12]
    job_dir = Path(current_app.config["WORK_DIR"]) / job_id
    clips_dir = job_dir / "clips"
    out_dir = job_dir / "out"
    clips_dir.mkdir(parents=True, exist_ok=True)
    out_dir.mkdir(parents=True, exist_ok=True)

    archive_path = job_dir / "clips.zip"
    f.save(archive_path)
    try:
        with zipfile.ZipFile(archive_path) as zf:
            zf.extractall(clips_dir)
    except zipfile.BadZipFile:
        return jsonify({"error": "Not a valid zip archive"}), 400

    _jobs[job_id] = {
        "dir": job_dir,
        "clips_dir": clips_dir,
        "out_dir": out_dir,
        "filename": f.filename,
        "status": "uploaded",
    }

    return jsonify({"job_id": job_id, "filename": f.filename})


@bp.route("/api/jobs/<job_id>/process", methods=["POST"])
def start_process(job_id: str):
    if job_id not in _jobs:
        return jsonify({"error": "Job not found"}), 404

    job = _jobs[job_id]
    if job["status"] not in ("uploaded", "done", "error"):
        return jsonify({"error": f"Job is already {job['status']}"}), 409

    config = request.get_json(silent=True) or {}

    try:
        max_duration = float(config.get("max_duration", 600.0))
        spacing = float(config.get("spacing", 0.1))
    except (TypeError, ValueError):
        return jsonify({"error": "max_duration and spacing must be numbers"}), 400

    manifest = Manifest(
        source=job["clips_dir"],
        destination=job["out_dir"],
        wav_dir=job["dir"] / "wav",
        base_name=config.get("base_name", "audioSprite"),
        max_duration=max_duration,
        spacing=spacing,
    )

    progress_queue: queue.Queue = queue.Queue()
    job["progress_queue"] = progress_queue
    job["status"] = "processing"
    job["error"] = None

    def run():
        try:
            def on_progress(stage: str, frac: float):
                progress_queue.put({"stage": stage, "progress": round(frac, 3)})

            result = process(manifest, on_progress=on_progress)
            job["result"] = {
                "metadata_path": str(result.metadata_path),
                "files": [p.name for p in result.sprite_files],
                "sprites": result.group_count,
                "sounds": result.clip_count,
            }
            job["status"] = "done"
        except (ConfigError, ClipValidationError) as e:
            job["status"] = "error"
            job["error"] = "; ".join(e.problems)
        except Exception as e:
            job["status"] = "error"
            job["error"] = str(e)
        finally:
            progress_queue.put(None)  # sentinel

    threading.Thread(target=run, daemon=True).start()
    return jsonify({"status": "started"})


@bp.route("/api/jobs/<job_id>/progress")
def progress_stream(job_id: str):
    if job_id not in _jobs:
        return jsonify({"error": "Job not found"}), 404

    job = _jobs[job_id]
    q = job.get("progress_queue")

    if q is None:
        return jsonify({"error": "No processing in progress"}), 409

    def generate():
        while True:
            try:
                msg = q.get(timeout=120)
            except queue.Empty:
                yield "data: {\"error\": \"timeout\"}\n\n"
                break
            if msg is None:
                if job["status"] == "error":
                    data = json.dumps({"error": job["error"]})
                else:
                    data = json.dumps({
                        "stage": "complete",
                        "progress": 1.0,
                        "result": job.get("result"),
                    })
                yield f"data: {data}\n\n"
                break
            yield f"data: {json.dumps(msg)}\n\n"

    return Response(generate(), mimetype="text/event-stream")


@bp.route("/api/jobs/<job_id>/metadata")
def download_metadata(job_id: str):
    if job_id not in _jobs:
        return jsonify({"error": "Job not found"}), 404

    job = _jobs[job_id]
    if job["status"] != "done":
        return jsonify({"error": "Job not complete"}), 409

    metadata_path = Path(job["result"]["metadata_path"])
    return send_from_directory(metadata_path.parent, metadata_path.name)


@bp.route("/api/jobs/<job_id>/files/<path:name>")
def download_file(job_id: str, name: str):
    if job_id not in _jobs:
        return jsonify({"error": "Job not found"}), 404

    job = _jobs[job_id]
    if job["status"] != "done":
        return jsonify({"error": "Job not complete"}), 409
    if name not in job["result"]["files"]:
        return jsonify({"error": "File not found"}), 404

    return send_from_directory(job["out_dir"], name, as_attachment=True)


@bp.route("/api/jobs/<job_id>/status")
def job_status(job_id: str):
    if job_id not in _jobs:
        return jsonify({"error": "Job not found"}), 404

    job = _jobs[job_id]
    resp = {"status": job["status"], "filename": job.get("filename")}
    if job["status"] == "done":
        resp["result"] = job.get("result")
    if job["status"] == "error":
        resp["error"] = job.get("error")
    return jsonify(resp)
