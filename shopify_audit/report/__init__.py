from shopify_audit.report.write_report import CSV_HEADERS, print_audit_summary, write_csv_report, write_update_results

__all__ = ["CSV_HEADERS", "print_audit_summary", "write_csv_report", "write_update_results"]
