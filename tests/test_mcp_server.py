"""
Tests for the MCP tool functions.
"""

from switching_deadlines import mcp_server


class TestMcpTools:
    """Tests for the functions exposed as MCP tools."""

    def test_calculate_earliest_start_date(self):
        """Test deadline tool."""
        result = mcp_server.calculate_earliest_start_date("gas", "switch", True, "2025-10-01")

        assert result["earliest_start_date"] == "2025-10-22"
        assert result["working_days_applied"] == 13
        assert result["rule"]["id"] == "gas_switch_with_termination"

    def test_calculate_case_insensitive(self):
        """Commodity and use case are case insensitive."""
        result = mcp_server.calculate_earliest_start_date("Power", "SWITCH", False, "2025-10-01")
        assert result["earliest_start_date"] == "2025-10-03"

    def test_calculate_invalid_commodity(self):
        """Errors are returned, not raised."""
        result = mcp_server.calculate_earliest_start_date("water", "switch")
        assert "Invalid switching case" in result["error"]

    def test_calculate_invalid_date(self):
        """Invalid dates are reported as error."""
        result = mcp_server.calculate_earliest_start_date("power", "switch", False, "invalid-date")
        assert result["error"].startswith("Invalid date")

    def test_calculate_rule_not_found(self):
        """Missing rules are reported as error."""
        result = mcp_server.calculate_earliest_start_date("power", "relocation", True, "2025-10-01")
        assert "No rule found" in result["error"]

    def test_validate_start_date(self):
        """Test validation tool."""
        result = mcp_server.validate_start_date(
            "power", "switch", "2025-10-02", requires_termination=True, from_date="2025-10-01"
        )

        assert result["is_valid"] is False
        assert result["earliest_valid_date"] == "2025-10-07"
        assert result["rule_id"] == "power_switch_with_termination"

    def test_get_day_info(self):
        """Test day tool."""
        result = mcp_server.get_day_info("2025-12-24")

        assert result["is_working_day"] is False
        assert result["holiday"]["type"] == "operational_holiday"

    def test_get_day_info_invalid(self):
        """Invalid dates are reported as error."""
        assert "error" in mcp_server.get_day_info("2025-02-30")

    def test_get_holidays(self):
        """Test holiday tool."""
        result = mcp_server.get_holidays(2026)

        assert result["year"] == 2026
        assert result["holiday_count"] == len(result["holidays"]) == 21
        assert "is_one_time" not in result["holidays"][0]

    def test_get_holidays_out_of_range(self):
        """Years outside the supported range are rejected."""
        assert "error" in mcp_server.get_holidays(99)

    def test_list_rules(self):
        """Test rule tool."""
        result = mcp_server.list_rules()

        assert result["count"] == 6
        assert {r["id"] for r in result["rules"]} >= {"gas_relocation", "power_relocation"}

    def test_create_mcp_server(self):
        """The server can be created with all tools."""
        server = mcp_server.create_mcp_server()
        assert server.name == "Switching Deadlines"
