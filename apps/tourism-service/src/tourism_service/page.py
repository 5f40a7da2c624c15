from __future__ import annotations

# Single-page client: replays the server's map snapshot onto Leaflet and
# renders the dashboard payload. All derivation happens server side.
DASHBOARD_PAGE = """
<!doctype html>
<html lang="id">
  <head>
    <meta charset="UTF-8" />
    <meta name="viewport" content="width=device-width, initial-scale=1.0" />
    <title>Wisata Grobogan</title>
    <link rel="stylesheet" href="https://unpkg.com/leaflet@1.9.4/dist/leaflet.css" />
    <script src="https://unpkg.com/leaflet@1.9.4/dist/leaflet.js"></script>
    <style>
      body { font-family: sans-serif; max-width: 1100px; margin: 0 auto; padding: 0 12px 48px; color: #1e293b; }
      header { display: flex; justify-content: space-between; align-items: center; background: #047857; color: #fff; padding: 12px 16px; }
      nav button { margin-left: 8px; padding: 6px 12px; cursor: pointer; }
      .grid { display: grid; grid-template-columns: repeat(auto-fill, minmax(160px, 1fr)); gap: 8px; }
      .card { border: 1px solid #e2e8f0; border-radius: 8px; padding: 12px; }
      .card .value { font-size: 28px; font-weight: bold; }
      .green { background: #dcfce7; } .blue { background: #dbeafe; } .violet { background: #f3e8ff; }
      .muted { color: #64748b; font-size: 13px; }
      .badge { display: inline-block; padding: 2px 8px; border-radius: 999px; font-size: 12px; margin: 1px; background: #fee2e2; }
      .badge.safe { background: #dcfce7; }
      #map { height: 400px; border-radius: 8px; margin-top: 8px; }
      table { width: 100%; border-collapse: collapse; margin-top: 8px; }
      th, td { text-align: left; padding: 6px; border-bottom: 1px solid #e2e8f0; font-size: 14px; }
      form label { display: block; margin-top: 10px; font-size: 14px; }
      form input, form select { width: 100%; padding: 6px; box-sizing: border-box; }
      .hidden { display: none; }
    </style>
  </head>
  <body>
    <header>
      <div><strong>Wisata Grobogan</strong><div class="muted" style="color:#a7f3d0">Sistem Input &amp; Monitoring Data</div></div>
      <nav>
        <button onclick="showTab('dashboard')">Dashboard</button>
        <button onclick="showTab('input')">Input Data</button>
      </nav>
    </header>

    <section id="tab-dashboard">
      <h2>Dashboard Pariwisata</h2>
      <label>Pilih Kecamatan:
        <select id="filter" onchange="setFilter(this.value)"><option value="all">Semua Kecamatan</option></select>
      </label>
      <h3>Ringkasan</h3>
      <div class="grid" id="kpis"></div>
      <h3>Peta Sebaran Wisata</h3>
      <div id="map"></div>
      <p class="muted">* Menampilkan lokasi berdasarkan koordinat atau titik tengah kecamatan</p>
      <h3 id="district-title">Sebaran per Kecamatan</h3>
      <div class="grid" id="districts"></div>
      <h3>Detail Wisata</h3>
      <div class="grid" id="details"></div>
      <h3>Daftar Data Wisata</h3>
      <table>
        <thead><tr><th>Obyek Wisata</th><th>Lokasi</th><th>Kategori</th><th>Rawan Bencana</th><th>Kapasitas</th><th></th></tr></thead>
        <tbody id="rows"></tbody>
      </table>
    </section>

    <section id="tab-input" class="hidden">
      <h2>Input Data Wisata</h2>
      <form id="site-form" onsubmit="submitSite(event)">
        <label>Nama Obyek Wisata <input name="name" required placeholder="Contoh: Bledug Kuwu" /></label>
        <label>Lokasi Desa <input name="village" required placeholder="Nama Desa" /></label>
        <label>Lokasi Kecamatan <select name="district" id="district-select"></select></label>
        <label>Latitude (opsional) <input name="latitude" placeholder="Contoh: -7.0867" /></label>
        <label>Longitude (opsional) <input name="longitude" placeholder="Contoh: 110.9157" /></label>
        <label>Jenis Wisata <select name="type" id="type-select"></select></label>
        <label>Daya Tampung (Orang) <input name="capacity" type="number" min="0" value="0" /></label>
        <fieldset id="risk-boxes"><legend>Potensi Kerawanan Bencana</legend></fieldset>
        <button type="submit">Simpan Data Wisata</button>
      </form>
    </section>

    <script>
      const COLORS = { green: "#16a34a", blue: "#2563eb", violet: "#7c3aed" };
      let map = null;
      let tileLayer = null;
      let markers = [];

      const esc = (s) => String(s).replace(/[&<>"']/g, (c) => ({"&":"&amp;","<":"&lt;",">":"&gt;",'"':"&quot;","'":"&#39;"}[c]));

      async function req(path, method = "GET", body = null) {
        const res = await fetch(path, {
          method,
          headers: { "Content-Type": "application/json" },
          body: body ? JSON.stringify(body) : undefined,
        });
        const data = await res.json();
        if (!data.success) throw new Error(data.error ? data.error.message : "request failed");
        return data.data;
      }

      function showTab(tab) {
        document.getElementById("tab-dashboard").classList.toggle("hidden", tab !== "dashboard");
        document.getElementById("tab-input").classList.toggle("hidden", tab !== "input");
        if (tab === "dashboard") refresh();
      }

      function replayMap(snapshot) {
        if (!map) {
          map = L.map("map");
          tileLayer = L.tileLayer(snapshot.tile_layer.url_template, { attribution: snapshot.tile_layer.attribution }).addTo(map);
        }
        markers.forEach((m) => m.remove());
        markers = snapshot.markers.map((m) =>
          L.circleMarker([m.lat, m.lng], { radius: 8, color: COLORS[m.color], fillOpacity: 0.8 })
            .addTo(map)
            .bindPopup(m.popup_html)
        );
        const view = snapshot.viewport;
        if (view.kind === "bounds") map.fitBounds(view.bounds, { padding: view.padding });
        else map.setView(view.center, view.zoom);
      }

      function render(data) {
        const stats = data.stats;
        const kpis = [
          `<div class="card"><div class="muted">TOTAL OBYEK WISATA</div><div class="value">${stats.total_count}</div></div>`,
          `<div class="card"><div class="muted">TOTAL DAYA TAMPUNG</div><div class="value">${stats.total_capacity.toLocaleString()}</div></div>`,
        ].concat(stats.counts_by_type.map((t) =>
          `<div class="card ${t.color}"><div class="muted">${esc(t.type)}</div><div class="value">${t.count}</div></div>`));
        document.getElementById("kpis").innerHTML = kpis.join("");
        document.getElementById("district-title").textContent =
          stats.district_filter === "all" ? "Sebaran per Kecamatan" : `Data Kecamatan ${stats.district_filter}`;
        document.getElementById("districts").innerHTML = stats.counts_by_district.map((d) =>
          `<div class="card"><div class="muted">${esc(d.district)}</div><div class="value">${d.count}</div></div>`).join("");
        document.getElementById("details").innerHTML = data.type_details.map((t) =>
          `<div class="card"><strong>${esc(t.type)} (${t.count})</strong>` +
          (t.sites.length ? "<ul>" + t.sites.map((s) => `<li>${esc(s.name)} <span class="muted">${esc(s.district)}</span></li>`).join("") + "</ul>"
                          : `<p class="muted">Belum ada data.</p>`) + "</div>").join("");
        document.getElementById("rows").innerHTML = data.sites.length ? data.sites.map((s) =>
          `<tr><td>${esc(s.name)}</td><td>${esc(s.district)}<div class="muted">Desa ${esc(s.village)}</div></td>` +
          `<td>${esc(s.type)}</td><td>${s.risk_badges.map((b) => `<span class="badge ${s.risks.length ? "" : "safe"}">${esc(b)}</span>`).join("")}</td>` +
          `<td>${s.capacity.toLocaleString()} org</td><td><button class="remove" data-id="${esc(s.id)}">Hapus</button></td></tr>`).join("")
          : `<tr><td colspan="6" class="muted">Tidak ada data yang ditemukan untuk filter ini.</td></tr>`;
        document.querySelectorAll("#rows button[data-id]").forEach((button) =>
          button.addEventListener("click", () => removeSite(button.dataset.id)));
        replayMap(data.map);
      }

      async function refresh() { render(await req("/v1/dashboard")); }

      async function setFilter(district) {
        await req("/v1/dashboard/filter", "PUT", { district });
        await refresh();
      }

      async function removeSite(id) {
        if (!confirm("Apakah anda yakin ingin menghapus data ini?")) return;
        await req(`/v1/sites/${encodeURIComponent(id)}?confirm=true`, "DELETE");
        await refresh();
      }

      async function submitSite(event) {
        event.preventDefault();
        const form = new FormData(event.target);
        const body = Object.fromEntries(["name", "village", "district", "type", "capacity", "latitude", "longitude"].map((k) => [k, form.get(k)]));
        body.risks = form.getAll("risks");
        if (!body.name.trim() || !body.village.trim()) { alert("Mohon lengkapi nama dan lokasi desa."); return; }
        try {
          await req("/v1/sites", "POST", body);
        } catch (err) { alert(err.message); return; }
        event.target.reset();
        alert("Data berhasil disimpan!");
        showTab("dashboard");
      }

      async function boot() {
        const ref = await req("/v1/reference");
        const options = ref.districts.map((d) => `<option value="${esc(d.name)}">${esc(d.name)}</option>`).join("");
        document.getElementById("filter").insertAdjacentHTML("beforeend", options);
        document.getElementById("district-select").innerHTML = options;
        document.getElementById("type-select").innerHTML = ref.types.map((t) => `<option value="${esc(t.value)}">${esc(t.value)}</option>`).join("");
        document.getElementById("risk-boxes").insertAdjacentHTML("beforeend", ref.risks.map((r) =>
          `<label><input type="checkbox" name="risks" value="${esc(r.value)}" style="width:auto" /> ${esc(r.value)}</label>`).join(""));
        document.getElementById("filter").value = (await req("/v1/dashboard/filter")).district;
        await refresh();
      }

      boot();
    </script>
  </body>
</html>
"""
