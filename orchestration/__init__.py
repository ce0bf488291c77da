from .analysis import AnalysisPipeline, AnalysisStatus, run_analysis

__all__ = ["AnalysisPipeline", "AnalysisStatus", "run_analysis"]
