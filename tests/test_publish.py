"""Tests for the GitHub publisher and the publish endpoint."""
import base64
from unittest.mock import MagicMock, patch

import pytest
import requests

from newsroom.publishing.github import GitHubPublisher, encode_file_content, validate_file_entry
from newsroom.web import create_app
from tests.conftest import make_response


@pytest.fixture
def app():
    return create_app('testing')


@pytest.fixture
def client(app):
    return app.test_client()


def make_publisher(put_status=201, post_status=200):
    session = MagicMock()
    session.put.return_value = make_response({'content': {}}, status=put_status)
    session.post.return_value = make_response(None, status=post_status)
    publisher = GitHubPublisher('tok', 'owner/site', deploy_hook_url='https://hook.test/x', session=session)
    return publisher, session


def test_encode_plain_content():
    assert encode_file_content({'path': 'a.md', 'content': 'héllo'}) == base64.b64encode('héllo'.encode()).decode()


def test_encode_prefers_base64_content():
    assert encode_file_content({'path': 'a.png', 'content': 'x', 'contentBase64': 'AAAA'}) == 'AAAA'


def test_encode_missing_content_is_empty():
    assert encode_file_content({'path': 'a.md'}) == ''


def test_publish_commits_each_file_then_deploys():
    publisher, session = make_publisher()

    count = publisher.publish([{'path': '/content/a.md', 'content': 'A'}, {'path': 'b.md', 'content': 'B'}])

    assert count == 2
    first_url, = session.put.call_args_list[0].args
    assert first_url == 'https://api.github.com/repos/owner/site/contents/content/a.md'
    payload = session.put.call_args_list[0].kwargs['json']
    assert payload == {'message': 'news update', 'branch': 'main', 'content': base64.b64encode(b'A').decode()}
    assert session.put.call_args_list[0].kwargs['headers']['Authorization'] == 'Bearer tok'
    session.post.assert_called_once_with('https://hook.test/x', timeout=30)


def test_publish_stops_on_commit_error():
    publisher, session = make_publisher(put_status=422)

    with pytest.raises(requests.exceptions.HTTPError):
        publisher.publish([{'path': 'a.md', 'content': 'A'}])

    session.post.assert_not_called()


def test_publish_rejects_entry_without_path():
    publisher, _ = make_publisher()

    with pytest.raises(ValueError):
        publisher.publish([{'content': 'A'}])


@pytest.mark.parametrize('entry', [
    'content/a.md',
    {'content': 'A'},
    {'path': ''},
    {'path': 42},
    {'path': 'a.md', 'content': ['A']},
    {'path': 'a.md', 'contentBase64': 7},
])
def test_validate_file_entry_rejects_malformed(entry):
    with pytest.raises(ValueError):
        validate_file_entry(entry)


def test_publish_commits_nothing_when_a_later_entry_is_malformed():
    publisher, session = make_publisher()

    with pytest.raises(ValueError):
        publisher.publish([{'path': 'a.md', 'content': 'A'}, 'b.md'])

    session.put.assert_not_called()
    session.post.assert_not_called()


def test_endpoint_rejects_non_post(client):
    response = client.get('/api/publish')

    assert response.status_code == 405
    assert response.get_json() == {'error': 'POST only'}


def test_endpoint_requires_secrets(app, client):
    app.config['GITHUB_TOKEN'] = None

    response = client.post('/api/publish', json={'files': []})

    assert response.status_code == 500
    assert response.get_json() == {'error': 'Missing secrets'}


def test_endpoint_rejects_invalid_json(client):
    response = client.post('/api/publish', data='{not json', content_type='application/json')

    assert response.status_code == 400
    assert response.get_json() == {'error': 'Invalid JSON body'}


def test_endpoint_publishes_files(client):
    with patch('newsroom.web.routes.publish.GitHubPublisher') as publisher_cls:
        response = client.post('/api/publish', json={
            'message': 'weekly news',
            'files': [{'path': 'content/2025/03/04/a.md', 'content': 'A'}],
        })

    assert response.status_code == 200
    assert response.get_json() == {'ok': True}
    kwargs = publisher_cls.call_args.kwargs
    assert kwargs['token'] == 'test-token'
    assert kwargs['deploy_hook_url'] == 'https://deploy.example.test/hook'
    publisher_cls.return_value.publish.assert_called_once_with(
        [{'path': 'content/2025/03/04/a.md', 'content': 'A'}], message='weekly news'
    )


def test_endpoint_with_empty_body_still_deploys(client):
    with patch('newsroom.web.routes.publish.GitHubPublisher') as publisher_cls:
        response = client.post('/api/publish')

    assert response.status_code == 200
    publisher_cls.return_value.publish.assert_called_once_with([], message=None)


def test_endpoint_reports_publish_errors(client):
    with patch('newsroom.web.routes.publish.GitHubPublisher') as publisher_cls:
        publisher_cls.return_value.publish.side_effect = requests.exceptions.HTTPError('422 Error')
        response = client.post('/api/publish', json={'files': [{'path': 'a.md'}]})

    assert response.status_code == 500
    assert response.get_json() == {'error': '422 Error'}


@pytest.mark.parametrize('files, error', [
    (['content/a.md'], "files[0]: File entry must be an object"),
    ([{'path': 'a.md'}, {'content': 'B'}], "files[1]: File entry is missing 'path'"),
    ([{'path': 'a.md', 'content': 5}], "files[0]: File entry 'content' must be a string: a.md"),
    ([{'path': 'a.md', 'contentBase64': {'x': 1}}], "files[0]: File entry 'contentBase64' must be a string: a.md"),
])
def test_endpoint_rejects_malformed_file_entries(client, files, error):
    with patch('newsroom.web.routes.publish.GitHubPublisher') as publisher_cls:
        response = client.post('/api/publish', json={'files': files})

    assert response.status_code == 400
    assert response.get_json() == {'error': error}
    publisher_cls.assert_not_called()


def test_endpoint_rejects_non_list_files(client):
    response = client.post('/api/publish', json={'files': {'path': 'a.md'}})

    assert response.status_code == 400
    assert response.get_json() == {'error': 'files must be a list'}


def test_endpoint_rejects_non_string_message(client):
    with patch('newsroom.web.routes.publish.GitHubPublisher') as publisher_cls:
        response = client.post('/api/publish', json={'message': 3, 'files': []})

    assert response.status_code == 400
    assert response.get_json() == {'error': 'message must be a string'}
    publisher_cls.assert_not_called()
