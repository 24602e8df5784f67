import pytest
import sys
from pathlib import Path
from typing import Dict, Any

# Add project root to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent.parent))

from pith.models import FileFact


@pytest.fixture
def git_data() -> Dict[str, Any]:
    """Version-control evidence in the extractor's format."""
    return {
        "commitCount": 10,
        "lastModified": "2024-01-15T00:00:00Z",
        "createdAt": "2023-06-01T00:00:00Z",
        "authors": ["alice@example.com", "bob@example.com"],
        "primaryAuthor": "alice@example.com",
        "recentCommits": [
            {"hash": "abc123", "message": "Fix login", "author": "alice@example.com", "date": "2024-01-15T00:00:00Z"},
            {"hash": "def456", "message": "Add login", "author": "bob@example.com", "date": "2024-01-10T00:00:00Z"},
        ],
    }


@pytest.fixture
def login_fact(git_data) -> FileFact:
    """A file with one exported and one private function."""
    return FileFact.model_validate({
        "path": "src/auth/login.ts",
        "lines": 120,
        "imports": [
            {"from": "./session", "names": ["createSession"], "isTypeOnly": False},
            {"from": "../utils/hash", "names": ["hashPassword"], "isTypeOnly": False},
            {"from": "node:crypto", "names": ["randomBytes"], "isTypeOnly": False},
        ],
        "exports": [
            {"name": "authenticate", "kind": "function", "isReExport": False},
        ],
        "functions": [
            {
                "name": "authenticate",
                "signature": "async function authenticate(user: string, password: string): Promise<Session>",
                "params": [{"name": "user", "type": "string", "isOptional": False}],
                "returnType": "Promise<Session>",
                "isAsync": True,
                "isExported": True,
                "startLine": 10,
                "endLine": 15,
            },
            {
                "name": "checkLockout",
                "signature": "function checkLockout(user: string): boolean",
                "params": [],
                "returnType": "boolean",
                "isAsync": False,
                "isExported": False,
                "startLine": 20,
                "endLine": 30,
            },
        ],
        "classes": [],
        "interfaces": [],
        "git": git_data,
        "docs": {
            "jsdoc": {
                "authenticate": {"description": "Authenticate a user.", "params": []},
                "checkLockout": {"description": "Check lockout state.", "params": []},
            },
            "inlineComments": [],
            "todos": [],
            "deprecations": [],
        },
    })
