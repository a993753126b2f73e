import json, os, threading, uuid
from typing import Dict, Any, List, Optional
from shared.config import settings

# Serializes read-modify-write cycles on the index file within this process
_LOCK = threading.RLock()

def _index_path() -> str:
    return os.path.join(settings.data_dir, "summaries_index.json")

def _documents_dir() -> str:
    return os.path.join(settings.data_dir, "documents")

def _load_index() -> Dict[str, Any]:
    path = _index_path()
    if not os.path.exists(path):
        return {}
    with open(path, "r", encoding="utf-8") as f:
        return json.load(f)

def _save_index(idx: Dict[str, Any]) -> None:
    os.makedirs(settings.data_dir, exist_ok=True)
    path = _index_path()
    tmp = path + ".tmp"
    with open(tmp, "w", encoding="utf-8") as f:
        json.dump(idx, f, ensure_ascii=False, indent=2)
    os.replace(tmp, path)

def make_summary_id() -> str:
    return uuid.uuid4().hex

def put_summary(record: Dict[str, Any]) -> Dict[str, Any]:
    with _LOCK:
        idx = _load_index()
        idx[record["id"]] = record
        _save_index(idx)
    return record

def get_summary(summary_id: str, owner: str) -> Optional[Dict[str, Any]]:
    rec = _load_index().get(summary_id)
    if rec is None or rec.get("owner") != owner:
        return None
    return rec

def list_summaries(owner: str) -> List[Dict[str, Any]]:
    # Newest insertion first, then a stable sort keeps that order for equal timestamps
    recs = [r for r in reversed(list(_load_index().values())) if r.get("owner") == owner]
    return sorted(recs, key=lambda r: r["created_at"], reverse=True)

def delete_summary(summary_id: str, owner: str) -> Optional[Dict[str, Any]]:
    with _LOCK:
        idx = _load_index()
        rec = idx.get(summary_id)
        if rec is None or rec.get("owner") != owner:
            return None
        del idx[summary_id]
        _save_index(idx)
    return rec

def set_translation(summary_id: str, owner: str, translation: Dict[str, str], updated_at: str) -> Optional[Dict[str, Any]]:
    with _LOCK:
        idx = _load_index()
        rec = idx.get(summary_id)
        if rec is None or rec.get("owner") != owner:
            return None
        rec["translation"] = translation
        rec["updated_at"] = updated_at
        _save_index(idx)
    return rec

def put_source_document(data: bytes, suffix: str = ".pdf") -> str:
    os.makedirs(_documents_dir(), exist_ok=True)
    path = os.path.join(_documents_dir(), f"{uuid.uuid4().hex}{suffix}")
    with open(path, "wb") as f:
        f.write(data)
    return path

def remove_source_document(ref: str) -> bool:
    # Only blobs we wrote ourselves are ever removed
    docs = os.path.abspath(_documents_dir())
    path = os.path.abspath(ref)
    if os.path.dirname(path) != docs or not os.path.exists(path):
        return False
    os.remove(path)
    return True
