"""Use cases for publishing applications and handing out isolated copies."""
