"""Publishing of content files to the hosting repository."""
from newsroom.publishing.github import GitHubPublisher, encode_file_content

__all__ = ['GitHubPublisher', 'encode_file_content']
