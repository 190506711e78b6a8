"""Conversation engine — resolvers, phase nodes and graph assembly."""
