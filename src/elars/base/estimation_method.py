from abc import ABC, abstractmethod


class EstimationMethod(ABC):
    def __init__(self, _method):
        self._method = _method

    @abstractmethod
    def fit_beta_path(self, X, y, verbose=0):
        pass
