"""Temperature monitor entrypoint.

Polls the configured CPU or GPU temperature source and mirrors the value
on the Ocypus Iota L24 display, raising alerts when thresholds are crossed.

Usage: python -m ocypus.monitor
"""

from ocypus.monitor.polling import main

if __name__ == "__main__":
    main()
