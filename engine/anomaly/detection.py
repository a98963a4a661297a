"""
Detection logic for flagging abnormal points in a daily revenue series: z-score spikes and drops against the window mean, plus sharp point-to-point swings, each classified by severity with a readable description.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from typing import List, Optional, Sequence

import numpy as np
from scipy.stats import zscore

from engine.enums import AnomalyType, Severity
from config import settings


@dataclass(frozen=True)
class Anomaly:
    date: date
    type: AnomalyType
    severity: Severity
    description: str
    value: float
    z_score: Optional[float] = None
    change_rate: Optional[float] = None


@dataclass(frozen=True)
class AnomalyReport:
    has_anomalies: bool = False
    anomalies: List[Anomaly] = field(default_factory=list)


def _z_severity(z: float) -> Severity:
    return Severity.high if z > settings.anomaly_zscore_high else Severity.medium


def _change_severity(change_rate: float) -> Severity:
    return Severity.high if change_rate > settings.anomaly_change_pct_high else Severity.medium


def _z_scores(arr: np.ndarray) -> Optional[np.ndarray]:
    # population standard deviation; a flat window has no meaningful z-score
    if float(np.std(arr)) == 0:
        return None
    return np.abs(zscore(arr, ddof=0))


def detect(dates: Sequence[date], values: Sequence[float]) -> AnomalyReport:
    if len(values) < settings.anomaly_min_samples:
        return AnomalyReport()

    arr = np.array(values, dtype=float)
    mean = float(np.mean(arr))
    scores = _z_scores(arr)
    mean_denom = mean if mean != 0 else 1.0

    anomalies: List[Anomaly] = []
    for i in range(1, len(arr)):
        current = float(arr[i])
        previous = float(arr[i - 1])

        if scores is not None:
            z = float(scores[i])
            if z > settings.anomaly_zscore_threshold and current > mean:
                anomalies.append(Anomaly(
                    date=dates[i],
                    type=AnomalyType.spike,
                    severity=_z_severity(z),
                    description=f"Revenue spiked {(current - mean) / mean_denom * 100:.1f}% above the average",
                    value=current,
                    z_score=round(z, 3),
                ))
            if z > settings.anomaly_zscore_threshold and current < mean:
                anomalies.append(Anomaly(
                    date=dates[i],
                    type=AnomalyType.drop,
                    severity=_z_severity(z),
                    description=f"Revenue dropped {(mean - current) / mean_denom * 100:.1f}% below the average",
                    value=current,
                    z_score=round(z, 3),
                ))

        if previous == 0:
            continue
        change_rate = abs((current - previous) / previous) * 100
        if change_rate > settings.anomaly_change_pct_threshold:
            anomalies.append(Anomaly(
                date=dates[i],
                type=AnomalyType.volatility,
                severity=_change_severity(change_rate),
                description=f"Revenue swung sharply, changing {change_rate:.1f}% in a single day",
                value=current,
                change_rate=round(change_rate, 3),
            ))

    return AnomalyReport(has_anomalies=bool(anomalies), anomalies=anomalies)
