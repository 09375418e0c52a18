"""Play-animation timing and playback engine for the playbook editor."""

__version__ = "0.1.0"
