"""
RABKL Newsroom

Automated newsroom for a Sleeper fantasy league: polls recent transactions,
turns trades and signings into short articles and writes them as Markdown
content files ready to be published.

Packages:
    sleeper: API client for the Sleeper league data provider
    newspaper: Event normalization, copy generation and article writing
    publishing: Commits content files to GitHub and triggers a redeploy
    web: Flask app exposing the publish endpoint
"""

__version__ = "1.0.0"
