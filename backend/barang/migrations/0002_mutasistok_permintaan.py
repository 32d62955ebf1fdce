import django.db.models.deletion
from django.db import migrations, models


class Migration(migrations.Migration):

    dependencies = [
        ('barang', '0001_initial'),
        ('permintaan', '0001_initial'),
    ]

    operations = [
        migrations.AddField(
            model_name='mutasistok',
            name='permintaan',
            field=models.ForeignKey(blank=True, db_column='id_permintaan', null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='mutasi_stok', to='permintaan.permintaan', verbose_name='permintaan terkait'),
        ),
    ]
