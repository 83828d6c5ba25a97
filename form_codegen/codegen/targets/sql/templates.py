"""Jinja2 skeletons for the relational schema target."""

GENERIC_SCHEMA_TEMPLATE = """-- Schema for {{ table }}

CREATE TABLE {{ table }} (
{% for line in column_lines %}
  {{ line }}{{ "," if not loop.last else "" }}
{% endfor %}
);

-- Indexes
CREATE INDEX idx_{{ table }}_created_at ON {{ table }}(created_at);

-- Keep updated_at current
CREATE OR REPLACE FUNCTION update_{{ table }}_updated_at()
RETURNS TRIGGER AS $$
BEGIN
  NEW.updated_at = CURRENT_TIMESTAMP;
  RETURN NEW;
END;
$$ LANGUAGE plpgsql;

CREATE TRIGGER trigger_{{ table }}_updated_at
  BEFORE UPDATE ON {{ table }}
  FOR EACH ROW
  EXECUTE FUNCTION update_{{ table }}_updated_at();
"""

TSQL_SCHEMA_TEMPLATE = """-- SQL Server schema for {{ table }}

CREATE TABLE [dbo].[{{ table }}] (
{% for line in column_lines %}
    {{ line }}{{ "," if not loop.last else "" }}
{% endfor %}
);

-- Indexes
CREATE NONCLUSTERED INDEX [IX_{{ table }}_CreatedAt]
    ON [dbo].[{{ table }}] ([CreatedAt] DESC);

CREATE NONCLUSTERED INDEX [IX_{{ table }}_IsDeleted]
    ON [dbo].[{{ table }}] ([IsDeleted]);
GO

-- Keep UpdatedAt current
CREATE TRIGGER [dbo].[TR_{{ table }}_UpdatedAt]
ON [dbo].[{{ table }}]
AFTER UPDATE
AS
BEGIN
    SET NOCOUNT ON;
    UPDATE [dbo].[{{ table }}]
    SET [UpdatedAt] = GETDATE()
    FROM [dbo].[{{ table }}] t
    INNER JOIN inserted i ON t.[Id] = i.[Id];
END;
GO

-- Insert
CREATE PROCEDURE [dbo].[sp_Insert{{ table }}]
{% for line in insert_params %}
    {{ line }}{{ "," if not loop.last else "" }}
{% endfor %}
AS
BEGIN
    SET NOCOUNT ON;

    INSERT INTO [dbo].[{{ table }}] (
{% for line in insert_columns %}
        {{ line }}{{ "," if not loop.last else "" }}
{% endfor %}
    )
    VALUES (
{% for line in insert_values %}
        {{ line }}{{ "," if not loop.last else "" }}
{% endfor %}
    );

    SELECT SCOPE_IDENTITY() AS Id;
END;
GO

-- Update
CREATE PROCEDURE [dbo].[sp_Update{{ table }}]
{% for line in update_params %}
    {{ line }}{{ "," if not loop.last else "" }}
{% endfor %}
AS
BEGIN
    SET NOCOUNT ON;

    UPDATE [dbo].[{{ table }}]
    SET
{% for line in update_assignments %}
        {{ line }}{{ "," if not loop.last else "" }}
{% endfor %}
    WHERE [Id] = @Id AND [IsDeleted] = 0;

    SELECT @@ROWCOUNT AS RowsAffected;
END;
GO

-- Get by id
CREATE PROCEDURE [dbo].[sp_Get{{ table }}ById]
    @Id INT
AS
BEGIN
    SET NOCOUNT ON;

    SELECT *
    FROM [dbo].[{{ table }}]
    WHERE [Id] = @Id AND [IsDeleted] = 0;
END;
GO

-- Get all, paginated
CREATE PROCEDURE [dbo].[sp_GetAll{{ table }}]
    @PageNumber INT = 1,
    @PageSize INT = {{ page_size }}
AS
BEGIN
    SET NOCOUNT ON;

    SELECT *
    FROM [dbo].[{{ table }}]
    WHERE [IsDeleted] = 0
    ORDER BY [CreatedAt] DESC
    OFFSET (@PageNumber - 1) * @PageSize ROWS
    FETCH NEXT @PageSize ROWS ONLY;

    SELECT COUNT(*) AS TotalCount
    FROM [dbo].[{{ table }}]
    WHERE [IsDeleted] = 0;
END;
GO

-- Soft delete
CREATE PROCEDURE [dbo].[sp_Delete{{ table }}]
    @Id INT,
    @DeletedBy NVARCHAR(255) = NULL
AS
BEGIN
    SET NOCOUNT ON;

    UPDATE [dbo].[{{ table }}]
    SET [IsDeleted] = 1,
        [UpdatedBy] = @DeletedBy,
        [UpdatedAt] = GETDATE()
    WHERE [Id] = @Id;

    SELECT @@ROWCOUNT AS RowsAffected;
END;
GO
"""


def get_sql_templates():
    return {
        "generic_schema": GENERIC_SCHEMA_TEMPLATE,
        "tsql_schema": TSQL_SCHEMA_TEMPLATE,
    }
