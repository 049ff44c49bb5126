# Services package init
"""
Notes Backend: Services Layer
=============================

Service Inventory:
    - NoteService: note lifecycle rules, listing and statistics
    - word_stats:  tokenizer and word frequency ordering used by NoteService
"""
