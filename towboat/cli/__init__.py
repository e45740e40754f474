"""Command line interface for towboat"""
