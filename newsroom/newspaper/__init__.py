"""
Newsroom Article Generation Module

Turns Sleeper league transactions into short news-style articles.

Modules:
    events: Raw transaction view and canonical domain events
    identity: Resolves roster and player ids to display names
    normalizer: Converts raw transactions into trade and signing events
    prompt_builder: Builds the chat messages for delegated copy
    openai_client: API client for the text-generation service
    copy_generator: Template and AI copy strategies
    article_writer: Renders and writes Markdown articles with front-matter
    pipeline: Orchestrates fetch, normalize, generate and write
"""
