"""Sleeper league data provider client."""
from newsroom.sleeper.client import CollectResult, LeagueBundle, SleeperClient, recent_rounds

__all__ = ['CollectResult', 'LeagueBundle', 'SleeperClient', 'recent_rounds']
