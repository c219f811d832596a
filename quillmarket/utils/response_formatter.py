from flask import jsonify


def success_response(payload=None, message=None, status=200):
    resp = {"success": True}
    if payload is not None:
        resp.update(payload if isinstance(payload, dict) else {"data": payload})
    if message:
        resp["message"] = message
    return jsonify(resp), status


def error_response(code, message, details=None, status=400):
    err = {
        "error": {
            "code": code,
            "message": message,
            "details": details or {}
        }
    }
    return jsonify(err), status


def validation_issues(messages):
    """Flatten marshmallow's nested error dict into path/message pairs."""
    issues = []

    def walk(node, path):
        if isinstance(node, dict):
            for key, value in node.items():
                walk(value, path + [str(key)])
        elif isinstance(node, list) and node and all(isinstance(m, str) for m in node):
            for m in node:
                issues.append({"path": ".".join(path), "message": m})
        elif isinstance(node, list):
            for item in node:
                walk(item, path)
        else:
            issues.append({"path": ".".join(path), "message": str(node)})

    walk(messages, [])
    return issues
