"""Jinja2 skeletons for the ASP.NET backend target."""

CONTROLLER_TEMPLATE = """using Microsoft.AspNetCore.Mvc;
using {{ namespace }}.DTOs;
using {{ namespace }}.Services;

namespace {{ namespace }}.Controllers;

[ApiController]
[Route("api/[controller]")]
public class {{ entity }}Controller : ControllerBase
{
    private readonly I{{ entity }}Service _service;
    private readonly ILogger<{{ entity }}Controller> _logger;

    public {{ entity }}Controller(I{{ entity }}Service service, ILogger<{{ entity }}Controller> logger)
    {
        _service = service;
        _logger = logger;
    }

    [HttpGet]
    public async Task<ActionResult<ApiResponse<PagedResult<{{ entity }}Dto>>>> GetAll(
        [FromQuery] int pageNumber = 1,
        [FromQuery] int pageSize = {{ page_size }})
    {
        try
        {
            var result = await _service.GetAllAsync(pageNumber, pageSize);
            return Ok(ApiResponse<PagedResult<{{ entity }}Dto>>.FromData(result));
        }
        catch (Exception ex)
        {
            _logger.LogError(ex, "Error listing {{ entity }} records");
            return StatusCode(500, ApiResponse<object>.FromError("An error occurred", ex.Message));
        }
    }

    [HttpGet("{id}")]
    public async Task<ActionResult<ApiResponse<{{ entity }}Dto>>> GetById(int id)
    {
        try
        {
            var result = await _service.GetByIdAsync(id);
            if (result == null)
            {
                return NotFound(ApiResponse<object>.FromError("{{ entity }} not found"));
            }
            return Ok(ApiResponse<{{ entity }}Dto>.FromData(result));
        }
        catch (Exception ex)
        {
            _logger.LogError(ex, "Error getting {{ entity }} {Id}", id);
            return StatusCode(500, ApiResponse<object>.FromError("An error occurred", ex.Message));
        }
    }

    [HttpPost]
    public async Task<ActionResult<ApiResponse<{{ entity }}Dto>>> Create([FromBody] Create{{ entity }}Dto dto)
    {
        try
        {
            if (!ModelState.IsValid)
            {
                return BadRequest(ModelState);
            }
            var result = await _service.CreateAsync(dto);
            return CreatedAtAction(
                nameof(GetById),
                new { id = result.Id },
                ApiResponse<{{ entity }}Dto>.FromData(result, "{{ entity }} created successfully"));
        }
        catch (Exception ex)
        {
            _logger.LogError(ex, "Error creating {{ entity }}");
            return StatusCode(500, ApiResponse<object>.FromError("An error occurred", ex.Message));
        }
    }

    [HttpPut("{id}")]
    public async Task<ActionResult<ApiResponse<{{ entity }}Dto>>> Update(int id, [FromBody] Update{{ entity }}Dto dto)
    {
        try
        {
            if (!ModelState.IsValid)
            {
                return BadRequest(ModelState);
            }
            var result = await _service.UpdateAsync(id, dto);
            if (result == null)
            {
                return NotFound(ApiResponse<object>.FromError("{{ entity }} not found"));
            }
            return Ok(ApiResponse<{{ entity }}Dto>.FromData(result, "{{ entity }} updated successfully"));
        }
        catch (Exception ex)
        {
            _logger.LogError(ex, "Error updating {{ entity }} {Id}", id);
            return StatusCode(500, ApiResponse<object>.FromError("An error occurred", ex.Message));
        }
    }

    [HttpDelete("{id}")]
    public async Task<ActionResult<ApiResponse<object>>> Delete(int id)
    {
        try
        {
            var deleted = await _service.DeleteAsync(id);
            if (!deleted)
            {
                return NotFound(ApiResponse<object>.FromError("{{ entity }} not found"));
            }
            return Ok(ApiResponse<object>.FromData(null, "{{ entity }} deleted successfully"));
        }
        catch (Exception ex)
        {
            _logger.LogError(ex, "Error deleting {{ entity }} {Id}", id);
            return StatusCode(500, ApiResponse<object>.FromError("An error occurred", ex.Message));
        }
    }
}
"""

MODEL_TEMPLATE = """using System.ComponentModel.DataAnnotations;
using System.ComponentModel.DataAnnotations.Schema;

namespace {{ namespace }}.Models;

[Table("{{ table }}")]
public class {{ entity }}
{
    [Key]
    [DatabaseGenerated(DatabaseGeneratedOption.Identity)]
    public int Id { get; set; }

{% for member in members %}
{{ member | indent(4) }}

{% endfor %}
    [Required]
    public DateTime CreatedAt { get; set; } = DateTime.UtcNow;

    [Required]
    public DateTime UpdatedAt { get; set; } = DateTime.UtcNow;

    [MaxLength(255)]
    public string? CreatedBy { get; set; }

    [MaxLength(255)]
    public string? UpdatedBy { get; set; }

    public bool IsDeleted { get; set; }
}
"""

DTOS_TEMPLATE = """using System.ComponentModel.DataAnnotations;

namespace {{ namespace }}.DTOs;

public class {{ entity }}Dto
{
    public int Id { get; set; }
{% for line in read_properties %}
    {{ line }}
{% endfor %}
    public DateTime CreatedAt { get; set; }
    public DateTime UpdatedAt { get; set; }
    public string? CreatedBy { get; set; }
    public string? UpdatedBy { get; set; }
}

{% for dto in ["Create", "Update"] %}
public class {{ dto }}{{ entity }}Dto
{
{% for member in write_members %}
{{ member | indent(4) }}
{% if not loop.last %}

{% endif %}
{% endfor %}
}

{% endfor %}
public class ApiResponse<T>
{
    public bool Success { get; set; }
    public T? Data { get; set; }
    public string? Message { get; set; }
    public string? Error { get; set; }

    public static ApiResponse<T> FromData(T? data, string? message = null) =>
        new() { Success = true, Data = data, Message = message };

    public static ApiResponse<T> FromError(string message, string? error = null) =>
        new() { Success = false, Message = message, Error = error };
}
"""

SERVICE_TEMPLATE = """using {{ namespace }}.DTOs;

namespace {{ namespace }}.Services;

public interface I{{ entity }}Service
{
    Task<PagedResult<{{ entity }}Dto>> GetAllAsync(int pageNumber, int pageSize);
    Task<{{ entity }}Dto?> GetByIdAsync(int id);
    Task<{{ entity }}Dto> CreateAsync(Create{{ entity }}Dto dto);
    Task<{{ entity }}Dto?> UpdateAsync(int id, Update{{ entity }}Dto dto);
    Task<bool> DeleteAsync(int id);
}

public class PagedResult<T>
{
    public IReadOnlyList<T> Items { get; set; } = Array.Empty<T>();
    public int PageNumber { get; set; }
    public int PageSize { get; set; }
    public int TotalCount { get; set; }
    public int TotalPages => PageSize == 0 ? 0 : (int)Math.Ceiling(TotalCount / (double)PageSize);
}
"""

PROJECT_TEMPLATE = """<Project Sdk="Microsoft.NET.Sdk.Web">

  <PropertyGroup>
    <TargetFramework>net8.0</TargetFramework>
    <Nullable>enable</Nullable>
    <ImplicitUsings>enable</ImplicitUsings>
    <RootNamespace>{{ namespace }}</RootNamespace>
  </PropertyGroup>

  <ItemGroup>
    <PackageReference Include="Microsoft.EntityFrameworkCore.SqlServer" Version="8.0.0" />
    <PackageReference Include="Swashbuckle.AspNetCore" Version="6.5.0" />
  </ItemGroup>

</Project>
"""


def get_dotnet_templates():
    return {
        "controller": CONTROLLER_TEMPLATE,
        "model": MODEL_TEMPLATE,
        "dtos": DTOS_TEMPLATE,
        "service": SERVICE_TEMPLATE,
        "project": PROJECT_TEMPLATE,
    }
