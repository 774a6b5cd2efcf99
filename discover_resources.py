#!/usr/bin/env python3
"""
Data actions discovery for Azure Kubernetes offerings.

Thin entry point; the application lives in k8s_dataactions.libs.main_app.
"""

import sys
from k8s_dataactions.libs.main_app import main


if __name__ == "__main__":
    sys.exit(main())
