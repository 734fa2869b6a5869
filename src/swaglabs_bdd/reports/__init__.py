from .generate_report import generate_report, load_json_reports, summarize_features, build_metadata, build_custom_data

__all__ = ['generate_report', 'load_json_reports', 'summarize_features', 'build_metadata', 'build_custom_data']
