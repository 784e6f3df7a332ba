from dataclasses import dataclass
from typing import Tuple
import pandas as pd


@dataclass
class ChosenMetric:
    parity_loss_metric_data: pd.DataFrame   #parity_loss_metric, label
    metric: str
    label: Tuple[str, ...]


@dataclass
class GroupMetric:
    group_metric_data: pd.DataFrame         #group, value, label
    performance_data: pd.DataFrame          #x (label), y (performance score)
    fairness_metric: str
    performance_metric: str
    label: Tuple[str, ...]


@dataclass
class FairnessHeatmap:
    data: pd.DataFrame                      #metric, model, score
    matrix_model: pd.DataFrame              #labels x metrics
    scale: bool
    label: Tuple[str, ...]
