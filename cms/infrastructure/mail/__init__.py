from .fastmail_sender import FastMailSender, build_connection_config

__all__ = ["FastMailSender", "build_connection_config"]
