"""
Anomaly detection logic for daily revenue series, combining z-score spike and drop checks with point-to-point volatility checks.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from engine.anomaly.detection import Anomaly, AnomalyReport, detect

__all__ = ["Anomaly", "AnomalyReport", "detect"]
