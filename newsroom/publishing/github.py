"""
GitHub Publisher Module

Commits content files to the site repository through the GitHub contents
API, then calls the deploy hook so the site rebuilds.

Every file is a separate commit on the configured branch. Any non-2xx
response raises; nothing is retried.
"""

import base64
from typing import Dict, List, Optional

import requests
from loguru import logger

DEFAULT_COMMIT_MESSAGE = 'news update'


def encode_file_content(entry: Dict) -> str:
    """
    Base64 content for one file entry.

    Args:
        entry: {path, content?, contentBase64?}; contentBase64 is used as-is when present

    Returns:
        Base64-encoded content
    """
    if entry.get('contentBase64'):
        return entry['contentBase64']
    content = entry.get('content') or ''
    return base64.b64encode(content.encode('utf-8')).decode('ascii')


def validate_file_entry(entry: Dict) -> None:
    """
    Check one file entry before anything is committed.

    Args:
        entry: Candidate {path, content?, contentBase64?}

    Raises:
        ValueError: If the entry is not an object, has no non-empty string path,
            or carries content that is not a string
    """
    if not isinstance(entry, dict):
        raise ValueError("File entry must be an object")
    path = entry.get('path')
    if not isinstance(path, str) or not path.strip('/'):
        raise ValueError("File entry is missing 'path'")
    for key in ('content', 'contentBase64'):
        if entry.get(key) is not None and not isinstance(entry[key], str):
            raise ValueError(f"File entry '{key}' must be a string: {path}")


class GitHubPublisher:
    """Commits files to a GitHub repository and triggers a redeploy."""

    def __init__(
        self,
        token: str,
        repo: str,
        branch: str = 'main',
        deploy_hook_url: Optional[str] = None,
        api_url: str = 'https://api.github.com',
        timeout: int = 30,
        session: Optional[requests.Session] = None
    ):
        """
        Initialize publisher.

        Args:
            token: GitHub token with contents write access
            repo: Repository as owner/name
            branch: Target branch (default: main)
            deploy_hook_url: Deploy hook called after committing
            api_url: GitHub API root
            timeout: Request timeout in seconds
            session: Optional requests session
        """
        self.repo = repo
        self.branch = branch
        self.deploy_hook_url = deploy_hook_url
        self.api_url = api_url.rstrip('/')
        self.timeout = timeout
        self.session = session or requests.Session()
        self.token = token

        logger.info(f"Initialized GitHubPublisher: {self.repo}@{self.branch}")

    def commit_file(self, path: str, content_b64: str, message: str = DEFAULT_COMMIT_MESSAGE) -> Dict:
        """
        Create or replace one file with a commit.

        Raises:
            requests.exceptions.RequestException: On transport errors or non-2xx responses
        """
        path = path.lstrip('/')
        url = f"{self.api_url}/repos/{self.repo}/contents/{path}"
        payload = {
            'message': message,
            'branch': self.branch,
            'content': content_b64,
        }
        headers = {
            'Authorization': f"Bearer {self.token}",
            'Accept': 'application/vnd.github+json',
        }

        logger.info(f"Committing {path} to {self.repo}@{self.branch}")
        response = self.session.put(url, json=payload, headers=headers, timeout=self.timeout)
        response.raise_for_status()
        return response.json() if response.content else {}

    def trigger_deploy(self) -> None:
        """
        POST to the deploy hook.

        Raises:
            ValueError: If no deploy hook is configured
            requests.exceptions.RequestException: On transport errors or non-2xx responses
        """
        if not self.deploy_hook_url:
            raise ValueError("No deploy hook configured")

        logger.info("Triggering redeploy")
        response = self.session.post(self.deploy_hook_url, timeout=self.timeout)
        response.raise_for_status()

    def publish(self, files: List[Dict], message: Optional[str] = None) -> int:
        """
        Commit every file, then trigger a redeploy.

        Args:
            files: List of {path, content?, contentBase64?}
            message: Commit message (default: "news update")

        Returns:
            Number of files committed

        Raises:
            ValueError: If any entry is malformed (checked before the first commit)
        """
        message = message or DEFAULT_COMMIT_MESSAGE

        for entry in files:
            validate_file_entry(entry)

        for entry in files:
            self.commit_file(entry['path'], encode_file_content(entry), message)

        self.trigger_deploy()
        logger.success(f"Published {len(files)} files")
        return len(files)
