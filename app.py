"""Entry point so that `python app.py` (or a WSGI server pointed at `app:app`) runs the portal."""

from __future__ import annotations

from patient_portal.app import create_app, main

app = create_app()


if __name__ == "__main__":
    main()
