"""Publish endpoint: commits content files to GitHub and triggers a redeploy"""
from flask import Blueprint, current_app, jsonify, request
from loguru import logger

from newsroom.publishing.github import GitHubPublisher, validate_file_entry

bp = Blueprint('publish', __name__)


@bp.route('/publish', methods=['GET', 'POST', 'PUT', 'PATCH', 'DELETE'])
def publish():
    """
    Commit the posted files and redeploy the site.

    Body: {"message": str?, "files": [{"path": str, "content": str?, "contentBase64": str?}]}
    """
    if request.method != 'POST':
        return jsonify({'error': 'POST only'}), 405

    token = current_app.config.get('GITHUB_TOKEN')
    deploy_hook = current_app.config.get('VERCEL_DEPLOY_HOOK')

    if not token or not deploy_hook:
        logger.error("Publish requested but GitHub token or deploy hook is missing")
        return jsonify({'error': 'Missing secrets'}), 500

    raw = request.get_data(as_text=True)
    if raw.strip():
        body = request.get_json(force=True, silent=True)
        if not isinstance(body, dict):
            logger.warning("Rejected publish request with invalid JSON body")
            return jsonify({'error': 'Invalid JSON body'}), 400
    else:
        body = {}

    files = body.get('files') or []
    if not isinstance(files, list):
        return jsonify({'error': 'files must be a list'}), 400

    message = body.get('message')
    if message is not None and not isinstance(message, str):
        return jsonify({'error': 'message must be a string'}), 400

    for index, entry in enumerate(files):
        try:
            validate_file_entry(entry)
        except ValueError as e:
            logger.warning(f"Rejected publish request: files[{index}]: {e}")
            return jsonify({'error': f'files[{index}]: {e}'}), 400

    try:
        publisher = GitHubPublisher(
            token=token,
            repo=current_app.config['GITHUB_REPO'],
            branch=current_app.config['GITHUB_BRANCH'],
            deploy_hook_url=deploy_hook,
            api_url=current_app.config['GITHUB_API_URL'],
            timeout=current_app.config['PUBLISH_TIMEOUT']
        )
        publisher.publish(files, message=message)
        return jsonify({'ok': True}), 200

    except Exception as e:
        logger.error(f"Publish failed: {e}")
        return jsonify({'error': str(e)}), 500
