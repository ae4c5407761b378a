# CLI package for SoulZip
"""
Command-line interface for SoulZip.

Commands:
    soulzip calculate            — Evaluate stdin and print the report
    soulzip completions <shell>  — Print a shell completion script
"""
